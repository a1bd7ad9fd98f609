"""Tests for the seven-segment digit display."""

import logging

import pytest

from pieceworks.displays.seven_segment import DIGIT_PATTERNS, SevenSegmentDisplay


def _lit(display):
    return display.scene.visible_ids - {"background"}


def test_digit_two_lights_expected_segments(surface):
    display = SevenSegmentDisplay(surface, state="2")
    assert _lit(display) == {"a", "b", "g", "e", "d"}


@pytest.mark.parametrize("digit", sorted(DIGIT_PATTERNS))
def test_every_digit_pattern(surface, digit):
    display = SevenSegmentDisplay(surface, state=digit)
    assert _lit(display) == set(DIGIT_PATTERNS[digit])
    assert "background" in display.scene.visible_ids


def test_all_segments_always_mounted(surface):
    display = SevenSegmentDisplay(surface, state="1")
    assert display.scene.mounted_ids == ["background", "a", "b", "c", "d", "e", "f", "g"]


def test_off_segments_dimmed(surface):
    display = SevenSegmentDisplay(surface, {"opacityOffSegment": 0.3}, state="1")
    off = display.scene.get("a").node.attrs
    on = display.scene.get("b").node.attrs
    assert off["opacity"] == "0.3"
    assert "filter" not in off
    assert on["opacity"] == "1"
    assert on["filter"] == "url(#glow)"
    assert "opacity" not in display.scene.get("background").node.attrs


def test_int_digit_accepted(surface):
    display = SevenSegmentDisplay(surface)
    display.set_digit(7)
    assert display.digit == "7"
    assert _lit(display) == {"a", "b", "c"}


def test_invalid_digit_blanks(surface, caplog):
    display = SevenSegmentDisplay(surface)
    with caplog.at_level(logging.WARNING):
        display.set_digit("x")
    assert display.digit == ""
    assert _lit(display) == set()
    assert "Invalid digit" in caplog.text


def test_root_classes(surface):
    display = SevenSegmentDisplay(surface, state="5")
    assert display.scene.root_classes == ["digit-5", "glow-enabled"]
    display.set_glow(False)
    assert display.scene.root_classes == ["digit-5"]
    display.set_digit("")
    assert display.scene.root_classes == ["digit-blank"]


def test_edge_radius_rebuilds_background(surface):
    display = SevenSegmentDisplay(surface)
    display.set_option("edgeRadius", 6)
    assert display.scene.get("background").node.attrs["rx"] == "6"


def test_colors_follow_options(surface):
    display = SevenSegmentDisplay(surface)
    display.set_options({"backgroundColor": "#222222", "foregroundColor": "#00ffff"})
    assert display.scene.get("background").node.attrs["fill"] == "#222222"
    assert display.scene.get("g").node.attrs["fill"] == "#00ffff"
