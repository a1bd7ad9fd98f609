"""POST /api/render/{kind} — render a display to SVG or a raster image."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from pieceworks.config import Settings
from pieceworks.dependencies import get_display_class, get_settings
from pieceworks.engine.display import Display
from pieceworks.engine.scene import Surface
from pieceworks.errors import RasterDecodeError, RasterTimeoutError
from pieceworks.export.raster import mime_type, rasterize_bytes
from pieceworks.models.requests import RasterRequest, RenderRequest
from pieceworks.models.responses import RenderResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def build_display(cls: type[Display], request: RenderRequest) -> Display:
    surface = Surface(cls.kind)
    if request.state is None:
        return cls(surface, request.options)
    return cls(surface, request.options, request.state)


@router.post("/render/{kind}", response_model=RenderResponse)
async def render(request: RenderRequest, cls: type[Display] = Depends(get_display_class)) -> RenderResponse:
    display = build_display(cls, request)
    width, height = display.size
    return RenderResponse(
        svg=display.export_vector(),
        state=display.state,
        visible_ids=sorted(display.visible_ids()),
        width=width,
        height=height,
        filename=display.export_filename("svg"),
    )


@router.post("/render/{kind}/raster")
async def render_raster(
    request: RasterRequest,
    cls: type[Display] = Depends(get_display_class),
    settings: Settings = Depends(get_settings),
) -> Response:
    display = build_display(cls, request)
    scale = request.scale or settings.raster_default_scale
    width, height = display.size
    try:
        data = await rasterize_bytes(
            display.export_vector(),
            width=max(1, round(width * scale)),
            height=max(1, round(height * scale)),
            format=request.format,
            quality=request.quality,
            timeout=settings.raster_timeout_s,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RasterTimeoutError as e:
        logger.error("Raster export of %s timed out: %s", cls.kind, e)
        raise HTTPException(status_code=504, detail=str(e))
    except RasterDecodeError as e:
        logger.error("Raster export of %s failed: %s", cls.kind, e)
        raise HTTPException(status_code=422, detail=str(e))

    return Response(
        content=data,
        media_type=mime_type(request.format),
        headers={"Content-Disposition": f'inline; filename="{display.export_filename(request.format)}"'},
    )
