"""Shared test fixtures."""

from __future__ import annotations

import pytest

# Importing the display modules registers them by kind
from pieceworks.displays import checker_piece, chess_piece, die_face, minesweeper_tile, seven_segment  # noqa: F401
from pieceworks.engine.scene import Surface


LEGACY_DIGIT_SETTINGS = '''{
  "content": {"digit": "3", "displayType": "7-segment"},
  "appearance": {
    "backgroundColor": "#101010",
    "foregroundColor": "#00ff00",
    "opacityOffSegment": 0.2,
    "width": 60,
    "height": 120,
    "glowEnabled": false,
    "edgeRadius": 4
  },
  "generator": {
    "name": "7-Segment LED Display Generator",
    "version": "1.0.0",
    "versionDetails": {"major": 1, "minor": 0, "patch": 0, "string": "1.0.0"},
    "buildDate": "2024-01-01T00:00:00.000Z"
  }
}'''


@pytest.fixture
def surface() -> Surface:
    return Surface("test")


@pytest.fixture
def legacy_digit_settings() -> str:
    return LEGACY_DIGIT_SETTINGS
