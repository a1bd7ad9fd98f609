"""Tests for node bounds in viewBox coordinates."""

import numpy as np
import pytest

from pieceworks.engine.scene import el
from pieceworks.utils.geometry import bbox, node_bounds, parse_transform, within_viewbox


def test_bbox_empty():
    assert bbox(np.empty((0, 2))) == (0.0, 0.0, 0.0, 0.0)


def test_rect_and_circle_bounds():
    assert node_bounds(el("rect", x=5, y=5, width=90, height=90)) == (5.0, 5.0, 95.0, 95.0)
    assert node_bounds(el("circle", cx=50, cy=50, r=20)) == (30.0, 30.0, 70.0, 70.0)


def test_path_bounds():
    assert node_bounds(el("path", d="M8,5 L42,5 L42,15 L8,15 Z")) == pytest.approx((8, 5, 42, 15))


def test_group_with_transform():
    group = el(
        "g",
        transform="translate(10, 20) scale(0.5)",
        children=[el("rect", x=0, y=0, width=100, height=100)],
    )
    assert node_bounds(group) == pytest.approx((10, 20, 60, 70))


def test_parse_transform_identity():
    assert np.array_equal(parse_transform(None), np.eye(3))


def test_polygon_bounds():
    assert node_bounds(el("polygon", points="49,25 49,40 65,32.5")) == pytest.approx((49, 25, 65, 40))


def test_within_viewbox():
    assert within_viewbox((0, 0, 50, 100), (0, 0, 50, 100))
    assert not within_viewbox((0, 0, 50.5, 100), (0, 0, 50, 100))
