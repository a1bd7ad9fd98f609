"""Settings documents — factory defaults, import, and the last saved session."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from pieceworks.dependencies import get_display_class, get_store
from pieceworks.engine.display import Display
from pieceworks.engine.scene import Surface
from pieceworks.errors import MalformedSettingsError
from pieceworks.models.requests import ImportSettingsRequest
from pieceworks.persistence.settings_manager import (
    create_defaults_document,
    create_settings_document,
    import_settings,
)
from pieceworks.persistence.store import FileStore, initialize_settings, save_last_settings

router = APIRouter()


def _display_from_text(text: str, cls: type[Display]) -> Display:
    try:
        options, state = import_settings(text, cls)
    except MalformedSettingsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return cls(Surface(cls.kind), options, state)


@router.get("/settings/{kind}/defaults")
async def defaults(cls: type[Display] = Depends(get_display_class)) -> dict[str, Any]:
    return create_defaults_document(cls).to_json_dict()


@router.post("/settings/{kind}/import")
async def import_document(
    request: ImportSettingsRequest,
    cls: type[Display] = Depends(get_display_class),
) -> dict[str, Any]:
    """Normalize settings JSON or an exported SVG into a settings document."""
    display = _display_from_text(request.text, cls)
    return create_settings_document(display).to_json_dict()


@router.put("/settings/{kind}/last")
async def save_last(
    request: ImportSettingsRequest,
    cls: type[Display] = Depends(get_display_class),
    store: FileStore = Depends(get_store),
) -> dict[str, Any]:
    display = _display_from_text(request.text, cls)
    return save_last_settings(display, store).to_json_dict()


@router.get("/settings/{kind}/initial")
async def initial(
    cls: type[Display] = Depends(get_display_class),
    store: FileStore = Depends(get_store),
) -> dict[str, Any]:
    """Starting settings: last session, then settings.json, defaults.json, hardcoded defaults."""
    display = cls(Surface(cls.kind))
    result = initialize_settings(display, store=store, search_dir=store.directory)
    return {**result, "document": create_settings_document(display).to_json_dict()}
