"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import HTTPException

from pieceworks.config import settings
from pieceworks.engine.display import Display
from pieceworks.engine.registry import get_display_registry
from pieceworks.persistence.store import FileStore


def get_settings():
    return settings


def get_store() -> FileStore:
    return FileStore(settings.settings_dir)


def get_display_class(kind: str) -> type[Display]:
    """Resolve a path ``kind`` to its display class, 404 when unknown."""
    registry = get_display_registry()
    if kind not in registry:
        raise HTTPException(status_code=404, detail=f"Unknown display kind: {kind}")
    return registry.get(kind).cls
