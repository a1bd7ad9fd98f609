"""Tests for the minesweeper tile display."""

import logging

import pytest

from pieceworks.displays.minesweeper_tile import TILE_STATES, MinesweeperTileDisplay


def test_default_state_unplayed(surface):
    tile = MinesweeperTileDisplay(surface)
    assert tile.tile_state == "unplayed"
    assert tile.scene.visible_ids == {"unplayed"}


@pytest.mark.parametrize("state", list(TILE_STATES))
def test_each_state_shows_its_primitives(surface, state):
    tile = MinesweeperTileDisplay(surface, state=state)
    assert tile.scene.visible_ids == set(TILE_STATES[state])
    hidden = tile.scene.hidden_ids
    assert hidden.isdisjoint(TILE_STATES[state])
    for pid in hidden:
        assert tile.scene.get(pid).node.attrs["display"] == "none"


def test_number_uses_its_color_and_outline(surface):
    tile = MinesweeperTileDisplay(surface, {"number3Color": "#abcdef", "numberOutlineWidth": 2}, state="neighbor_3")
    node = tile.scene.get("number-3").node
    assert node.text == "3"
    assert node.attrs["fill"] == "#abcdef"
    assert node.attrs["stroke"] == "#ffffff"
    assert node.attrs["stroke-width"] == "2"
    assert node.attrs["paint-order"] == "stroke"


def test_smiley_cool_wears_sunglasses(surface):
    tile = MinesweeperTileDisplay(surface, state="smiley_cool")
    assert {"smiley-face", "smiley-sunglasses", "smiley-smile"} <= tile.scene.visible_ids
    assert "smiley-eyes" not in tile.scene.visible_ids


def test_invalid_state_falls_back(surface, caplog):
    with caplog.at_level(logging.WARNING):
        tile = MinesweeperTileDisplay(surface, state="exploded")
    assert tile.tile_state == "unplayed"
    assert "Invalid tileState" in caplog.text


def test_inner_shadow_toggle(surface):
    tile = MinesweeperTileDisplay(surface)
    unplayed = tile.scene.get("unplayed").node
    assert unplayed.attrs["filter"] == "url(#innerShadow)"
    assert "inner-shadow-enabled" in tile.scene.root_classes
    tile.set_inner_shadow(False)
    assert "filter" not in tile.scene.get("unplayed").node.attrs
    assert tile.scene.root_classes == ["tile-unplayed"]


def test_gradient_follows_unplayed_color(surface):
    tile = MinesweeperTileDisplay(surface, {"unplayedColor": "#336699"})
    gradient = next(d for d in tile.scene.defs if d.attrs.get("id") == "buttonGradient")
    stops = [c.attrs["stop-color"] for c in gradient.children]
    assert stops == ["#336699", "#336699CC"]


def test_highlight_and_shadow_roles_styled(surface):
    tile = MinesweeperTileDisplay(surface, {"highlightColor": "#eeeeee", "shadowOpacity": 0.5})
    group = tile.scene.get("unplayed").node
    highlights = group.with_role("highlight")
    shadows = group.with_role("shadow")
    assert len(highlights) == 2 and len(shadows) == 2
    assert all(n.attrs["stroke"] == "#eeeeee" for n in highlights)
    assert all(n.attrs["stroke-opacity"] == "0.5" for n in shadows)


def test_root_class_uses_dashes(surface):
    tile = MinesweeperTileDisplay(surface, state="revealed_mine")
    assert tile.scene.root_classes[0] == "tile-revealed-mine"
