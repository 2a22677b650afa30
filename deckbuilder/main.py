import logging
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckbuilder.api import analysis_router, formats_router, health_router
from deckbuilder.config import settings
from deckbuilder.models.failure import KnownError

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckbuilder"),
    debug=settings.debug,
)

app.include_router(analysis_router)
app.include_router(formats_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(request: Request, exc: KnownError) -> JSONResponse:
    """Return known failures in the ApiResponse envelope."""
    logger.info(
        "known_failure",
        extra={"path": request.url.path, "kind": exc.kind.value, "status_code": exc.status_code},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )
