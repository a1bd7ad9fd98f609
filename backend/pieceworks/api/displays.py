"""GET /api/displays — catalogue of registered display kinds."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pieceworks.dependencies import get_display_class
from pieceworks.engine.display import Display
from pieceworks.engine.registry import DisplayTypeSpec, get_display_registry
from pieceworks.models.responses import DisplayInfo

router = APIRouter()


def _info(spec: DisplayTypeSpec) -> DisplayInfo:
    cls = spec.cls
    return DisplayInfo(
        kind=spec.kind,
        name=spec.name,
        display_type=cls.display_type_name,
        state_key=cls.STATE_TABLE.key,
        states=cls.STATE_TABLE.states,
        default_state=cls.STATE_TABLE.default,
        defaults=cls.defaults(),
        tags=sorted(spec.tags),
    )


@router.get("/displays", response_model=list[DisplayInfo])
async def list_displays() -> list[DisplayInfo]:
    return [_info(spec) for spec in get_display_registry().all()]


@router.get("/displays/{kind}", response_model=DisplayInfo)
async def get_display(cls: type[Display] = Depends(get_display_class)) -> DisplayInfo:
    return _info(get_display_registry().get(cls.kind))
