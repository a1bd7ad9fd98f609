"""Tests for raster export: cairosvg render, Pillow re-encode, timeout and cancel."""

import asyncio
import io
import time

import pytest
from PIL import Image

from pieceworks.displays.die_face import DieFace
from pieceworks.displays.seven_segment import SevenSegmentDisplay
from pieceworks.engine.scene import Surface
from pieceworks.errors import RasterCancelledError, RasterDecodeError, RasterTimeoutError
from pieceworks.export.raster import (
    CancelToken,
    decode_data_uri,
    rasterize,
    rasterize_bytes,
    render_svg_to_png,
    to_data_uri,
)

TINY_SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"><rect width="4" height="4" fill="#00ff00"/></svg>'


def _slow_render(svg: str, width: int, height: int) -> bytes:
    time.sleep(0.5)
    return render_svg_to_png(svg, width, height)


def test_digit_raster_size_and_pixels():
    display = SevenSegmentDisplay(Surface(), {"glowEnabled": False}, state="8")
    uri = asyncio.run(display.export_raster(scale=2))
    mime, data = decode_data_uri(uri)
    assert mime == "image/png"
    with Image.open(io.BytesIO(data)) as img:
        assert img.size == (100, 200)
        rgba = img.convert("RGBA")
        # Background corner
        assert rgba.getpixel((1, 1))[:3] == (0, 0, 0)
        # Middle of segment a
        r, g, b, _ = rgba.getpixel((50, 20))
        assert r > 200 and g < 80 and b < 80


def test_jpeg_export():
    die = DieFace(Surface(), state=3)
    uri = asyncio.run(die.export_raster(scale=1, format="jpeg"))
    mime, data = decode_data_uri(uri)
    assert mime == "image/jpeg"
    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "JPEG"
        assert img.size == (50, 50)


def test_webp_bytes():
    data = asyncio.run(rasterize_bytes(TINY_SVG, 4, 4, format="webp"))
    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "WEBP"


def test_unsupported_format():
    with pytest.raises(ValueError):
        asyncio.run(rasterize_bytes(TINY_SVG, 4, 4, format="bmp"))


def test_decode_failure():
    with pytest.raises(RasterDecodeError):
        asyncio.run(rasterize_bytes("<svg", 4, 4))


def test_timeout_is_bounded():
    start = time.perf_counter()
    with pytest.raises(RasterTimeoutError):
        asyncio.run(rasterize_bytes(TINY_SVG, 4, 4, timeout=0.05, render=_slow_render))
    assert time.perf_counter() - start < 5


def test_timeout_is_a_timeout_error():
    assert issubclass(RasterTimeoutError, TimeoutError)


def test_precancelled_token():
    token = CancelToken()
    token.cancel()
    with pytest.raises(RasterCancelledError):
        asyncio.run(rasterize(TINY_SVG, 4, 4, cancel=token))


def test_cancel_in_flight():
    async def run() -> None:
        token = CancelToken()
        asyncio.get_running_loop().call_later(0.05, token.cancel)
        await rasterize_bytes(TINY_SVG, 4, 4, cancel=token, render=_slow_render)

    with pytest.raises(RasterCancelledError):
        asyncio.run(run())


def test_data_uri_round_trip():
    uri = to_data_uri(b"\x89PNG", "png")
    assert uri.startswith("data:image/png;base64,")
    assert decode_data_uri(uri) == ("image/png", b"\x89PNG")
    with pytest.raises(ValueError):
        decode_data_uri("image/png,abc")
