"""
Health check endpoint.

The service has no storage dependencies, so liveness is the only probe.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from deckbuilder.formats import FORMATS

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    formats: int


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Reports how many deck list dialects are registered."""
    return HealthResponse(status="healthy", formats=len(FORMATS))
