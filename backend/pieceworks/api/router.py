"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from pieceworks.api import boards, displays, health, render, settings

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(displays.router)
api_router.include_router(render.router)
api_router.include_router(settings.router)
api_router.include_router(boards.router)
