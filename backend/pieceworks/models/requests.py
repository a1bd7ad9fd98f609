"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    options: dict[str, Any] = Field(default_factory=dict, description="Option overrides merged over the defaults")
    state: Any = Field(default=None, description="State value; omitted means the display's default")


class RasterRequest(RenderRequest):
    scale: float | None = Field(default=None, gt=0, le=16, description="Pixel scale; defaults to the configured scale")
    format: str = Field(default="png", description="png, jpeg or webp")
    quality: int = Field(default=92, ge=1, le=100, description="Lossy encoder quality")


class ImportSettingsRequest(BaseModel):
    text: str = Field(..., description="Settings JSON document or an exported SVG")


class BoardRequest(BaseModel):
    options: dict[str, Any] = Field(default_factory=dict)
    initial_position: bool = Field(default=True, description="Set up the standard starting position")
