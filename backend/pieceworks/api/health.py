"""Health check."""

from __future__ import annotations

from fastapi import APIRouter

from pieceworks import __version__
from pieceworks.engine.registry import get_display_registry
from pieceworks.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        displays_registered=get_display_registry().count,
    )
