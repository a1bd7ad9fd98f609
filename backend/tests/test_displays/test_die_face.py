"""Tests for the die face display."""

import pytest

from pieceworks.displays.die_face import FACE_PIPS, DieFace, pip_center


@pytest.mark.parametrize("value", sorted(FACE_PIPS))
def test_pip_counts(surface, value):
    die = DieFace(surface, state=value)
    pips = {pid for pid in die.scene.visible_ids if pid.startswith("pip-")}
    assert len(pips) == int(value)
    assert "body" in die.scene.visible_ids


def test_int_value_accepted(surface):
    die = DieFace(surface, state=4)
    assert die.value == 4
    die.set_value(6)
    assert die.value == 6


def test_out_of_range_falls_back(surface):
    die = DieFace(surface, state=9)
    assert die.value == 1


def test_pip_geometry(surface):
    die = DieFace(surface, state=1)
    centre = die.scene.get("pip-c").node.attrs
    assert (centre["cx"], centre["cy"], centre["r"]) == ("50", "50", "6")
    assert pip_center("pip-tl") == pytest.approx((20, 20))


def test_numbers_style(surface):
    die = DieFace(surface, {"pipStyle": "numbers"}, state=5)
    assert not any(pid.startswith("pip-") for pid in die.scene.mounted_ids)
    assert die.scene.visible_ids == {"body", "numeral-5"}
    assert die.scene.get("numeral-5").node.text == "5"
    die.set_option("pipStyle", "dots")
    assert "numeral-5" not in die.scene.mounted_ids


def test_body_roundness(surface):
    die = DieFace(surface, {"roundness": 50, "faceColor": "#f0f0f0"})
    body = die.scene.get("body").node.attrs
    assert body["rx"] == "24"
    assert body["fill"] == "#f0f0f0"
