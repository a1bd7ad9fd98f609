"""Tests for reading exported SVG documents back."""

import pytest

from pieceworks.displays.checker_piece import CheckerPiece
from pieceworks.displays.chess_piece import ChessPiece
from pieceworks.displays.die_face import DieFace
from pieceworks.displays.minesweeper_tile import MinesweeperTileDisplay
from pieceworks.displays.seven_segment import SevenSegmentDisplay
from pieceworks.engine.options import create_options
from pieceworks.engine.scene import Surface
from pieceworks.errors import MalformedSettingsError
from pieceworks.svg.parser import coerce_value, parse_exported_svg, split_settings

CASES = [
    (SevenSegmentDisplay, {"foregroundColor": "#00ff00", "opacityOffSegment": 0.3, "glowEnabled": False}, "2"),
    (SevenSegmentDisplay, {}, ""),
    (MinesweeperTileDisplay, {"numberOutlineWidth": 2, "shadowOpacity": 0.5, "tileSize": 64}, "neighbor_7"),
    (CheckerPiece, {"crownStyle": "star", "glowColor": "rgba(1, 2, 3, 0.4)"}, True),
    (ChessPiece, {"style": "modern", "shadowEnabled": True}, "bishop"),
    (DieFace, {"pipStyle": "numbers", "roundness": 25}, "6"),
]


@pytest.mark.parametrize("cls,options,state", CASES)
def test_exported_settings_reproduce_options(cls, options, state):
    display = cls(Surface(), options, state)
    parsed = parse_exported_svg(display.export_vector())
    opts, state_text = split_settings(parsed.settings, cls.DEFAULTS, cls.STATE_TABLE.key, parsed.setting_types)
    assert create_options(opts, cls.DEFAULTS) == display.options
    assert cls.STATE_TABLE.normalize(state_text) == display.state


def test_resized_digit_round_trip():
    display = SevenSegmentDisplay(Surface())
    display.resize(80)
    parsed = parse_exported_svg(display.export_vector())
    assert (parsed.width, parsed.height) == (80.0, 160.0)
    assert parsed.viewbox == (0.0, 0.0, 50.0, 100.0)
    opts, _ = split_settings(parsed.settings, SevenSegmentDisplay.DEFAULTS, "digit")
    assert create_options(opts, SevenSegmentDisplay.DEFAULTS) == display.options


def test_hidden_ids_reported():
    display = SevenSegmentDisplay(Surface(), state="1")
    parsed = parse_exported_svg(display.export_vector())
    assert set(parsed.hidden_ids) == {"a", "d", "e", "f", "g"}
    assert "background" in parsed.primitive_ids


def test_malformed_svg():
    with pytest.raises(MalformedSettingsError):
        parse_exported_svg("<svg><unclosed></svg>")
    with pytest.raises(MalformedSettingsError):
        parse_exported_svg("<html></html>")


def test_coerce_by_default_type():
    assert coerce_value("true", False) is True
    assert coerce_value("12", 3) == 12
    assert coerce_value("1.5", 3) == 1.5
    assert coerce_value("2", 0.5) == 2.0
    assert coerce_value("#fff", "#000") == "#fff"


def test_coerce_unknown_keys_by_type_hint():
    assert coerce_value("false", type_hint="boolean") is False
    assert coerce_value("7", type_hint="number") == 7
    assert coerce_value("0.5", type_hint="number") == 0.5
    assert coerce_value("007") == "007"
    assert coerce_value("  padded ") == "  padded "


def test_mismatched_type_kept_as_text():
    opts, _ = split_settings({"width": "wide"}, SevenSegmentDisplay.DEFAULTS, "digit")
    assert opts["width"] == "wide"


def test_unknown_keys_survive_export():
    options = {"label": "007", "note": "  padded ", "count": 3, "ratio": 0.25, "flag": True}
    display = SevenSegmentDisplay(Surface(), options, "8")
    parsed = parse_exported_svg(display.export_vector())
    opts, _ = split_settings(parsed.settings, SevenSegmentDisplay.DEFAULTS, "digit", parsed.setting_types)
    restored = create_options(opts, SevenSegmentDisplay.DEFAULTS)
    assert restored == display.options
    assert {key: restored[key] for key in options} == options
