from deckbuilder.api.analysis import router as analysis_router
from deckbuilder.api.formats import router as formats_router
from deckbuilder.api.health import router as health_router

__all__ = [
    "analysis_router",
    "formats_router",
    "health_router",
]
