"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "1.0.0"
    displays_registered: int = 0


class DisplayInfo(BaseModel):
    kind: str
    name: str
    display_type: str
    state_key: str
    states: list[Any] = Field(default_factory=list)
    default_state: Any = None
    defaults: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)


class RenderResponse(BaseModel):
    svg: str
    state: Any = None
    visible_ids: list[str] = Field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    filename: str = ""


class BoardResponse(BaseModel):
    svg: str
    pieces: int = 0
    size: float = 0.0
