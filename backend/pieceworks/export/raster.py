"""Raster export — vector document → cairosvg → Pillow re-encode → data URI.

Rasterization runs in a worker thread and is always bounded: by a timeout,
by a cancel token, or both. Nothing here retries.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
from typing import Callable

import cairosvg
from PIL import Image

from pieceworks.errors import RasterCancelledError, RasterDecodeError, RasterTimeoutError

logger = logging.getLogger(__name__)

FORMATS = {
    "png": ("PNG", "image/png"),
    "jpeg": ("JPEG", "image/jpeg"),
    "jpg": ("JPEG", "image/jpeg"),
    "webp": ("WEBP", "image/webp"),
}

RenderFn = Callable[[str, int, int], bytes]


class CancelToken:
    """Abandons an in-flight raster export when cancelled."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


def render_svg_to_png(svg: str, width: int = 256, height: int = 256) -> bytes:
    """Render SVG string to PNG bytes using cairosvg."""
    try:
        return cairosvg.svg2png(
            bytestring=svg.encode("utf-8"),
            output_width=width,
            output_height=height,
        )
    except Exception as e:
        logger.warning("Failed to render SVG to PNG: %s", e)
        raise RasterDecodeError(f"Could not decode vector document: {e}") from e


def mime_type(format: str) -> str:
    return _format(format)[1]


def _format(format: str) -> tuple[str, str]:
    try:
        return FORMATS[format.lower()]
    except KeyError:
        raise ValueError(f"Unsupported raster format: {format}") from None


def encode_image(png_bytes: bytes, format: str = "png", quality: int = 92) -> bytes:
    """Re-encode a PNG buffer; JPEG has no alpha so it is flattened onto white."""
    pil_format, _ = _format(format)
    with Image.open(io.BytesIO(png_bytes)) as img:
        img = img.convert("RGBA")
        buf = io.BytesIO()
        if pil_format == "JPEG":
            flat = Image.new("RGB", img.size, (255, 255, 255))
            flat.paste(img, mask=img.getchannel("A"))
            flat.save(buf, format="JPEG", quality=quality)
        elif pil_format == "WEBP":
            img.save(buf, format="WEBP", quality=quality)
        else:
            img.save(buf, format="PNG")
    return buf.getvalue()


def to_data_uri(data: bytes, format: str = "png") -> str:
    return f"data:{mime_type(format)};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """``data:<mime>;base64,<payload>`` → (mime, bytes)."""
    header, _, payload = uri.partition(",")
    if not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    return header[5:-7], base64.b64decode(payload)


async def rasterize_bytes(
    svg: str,
    width: int,
    height: int,
    format: str = "png",
    quality: int = 92,
    timeout: float | None = None,
    cancel: CancelToken | None = None,
    render: RenderFn = render_svg_to_png,
) -> bytes:
    """Rasterize ``svg`` to ``width``×``height`` pixels in ``format``."""
    _format(format)
    if cancel is not None and cancel.cancelled:
        raise RasterCancelledError("Raster export cancelled before it started")

    loop = asyncio.get_running_loop()
    job = loop.run_in_executor(None, render, svg, width, height)
    waiters: set[asyncio.Future] = {job}
    cancel_task = None
    if cancel is not None:
        cancel_task = asyncio.ensure_future(cancel.wait())
        waiters.add(cancel_task)

    try:
        done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if cancel_task is not None:
            cancel_task.cancel()

    if job not in done:
        # The worker thread runs to completion; its result is discarded
        job.cancel()
        if cancel_task is not None and cancel_task in done:
            logger.info("Raster export cancelled (%dx%d %s)", width, height, format)
            raise RasterCancelledError("Raster export cancelled")
        logger.warning("Raster export timed out after %.2fs (%dx%d %s)", timeout, width, height, format)
        raise RasterTimeoutError(f"Rasterization did not finish within {timeout}s")

    png_bytes = job.result()
    data = encode_image(png_bytes, format, quality)
    logger.info("Rasterized %dx%d %s, %d bytes", width, height, format, len(data))
    return data


async def rasterize(
    svg: str,
    width: int,
    height: int,
    format: str = "png",
    quality: int = 92,
    timeout: float | None = None,
    cancel: CancelToken | None = None,
    render: RenderFn = render_svg_to_png,
) -> str:
    """Like ``rasterize_bytes`` but returns a ``data:`` URI."""
    data = await rasterize_bytes(
        svg, width, height, format=format, quality=quality, timeout=timeout, cancel=cancel, render=render
    )
    return to_data_uri(data, format)
