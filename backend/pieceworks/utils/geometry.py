"""Leaf-node geometry helpers: primitive bounds in viewBox coordinates."""

from __future__ import annotations

import logging
import re

import numpy as np
from numpy.typing import NDArray
from svgpathtools import parse_path

from pieceworks.engine.scene import Node

logger = logging.getLogger(__name__)

_TRANSFORM_RE = re.compile(r"(translate|scale)\s*\(([^)]*)\)")
_NUM_SPLIT_RE = re.compile(r"[\s,]+")


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def _numbers(text: str) -> list[float]:
    return [float(t) for t in _NUM_SPLIT_RE.split(text.strip()) if t]


def parse_transform(text: str | None) -> NDArray[np.float64]:
    """3×3 affine matrix for a ``translate``/``scale`` transform list."""
    matrix = np.eye(3)
    if not text:
        return matrix
    for op, args in _TRANSFORM_RE.findall(text):
        nums = _numbers(args)
        step = np.eye(3)
        if op == "translate":
            step[0, 2] = nums[0]
            step[1, 2] = nums[1] if len(nums) > 1 else 0.0
        else:
            step[0, 0] = nums[0]
            step[1, 1] = nums[1] if len(nums) > 1 else nums[0]
        matrix = matrix @ step
    return matrix


def _f(node: Node, name: str, default: float = 0.0) -> float:
    value = node.attrs.get(name)
    return float(value) if value not in (None, "") else default


def _own_points(node: Node) -> NDArray[np.float64]:
    tag = node.tag
    if tag == "rect":
        x, y = _f(node, "x"), _f(node, "y")
        w, h = _f(node, "width"), _f(node, "height")
        return np.array([[x, y], [x + w, y + h]])
    if tag == "circle":
        cx, cy, r = _f(node, "cx"), _f(node, "cy"), _f(node, "r")
        return np.array([[cx - r, cy - r], [cx + r, cy + r]])
    if tag == "ellipse":
        cx, cy = _f(node, "cx"), _f(node, "cy")
        rx, ry = _f(node, "rx"), _f(node, "ry")
        return np.array([[cx - rx, cy - ry], [cx + rx, cy + ry]])
    if tag == "line":
        return np.array([[_f(node, "x1"), _f(node, "y1")], [_f(node, "x2"), _f(node, "y2")]])
    if tag in ("polygon", "polyline"):
        nums = _numbers(node.attrs.get("points", ""))
        return np.array(nums, dtype=float).reshape(-1, 2)
    if tag == "path" and node.attrs.get("d"):
        xmin, xmax, ymin, ymax = parse_path(node.attrs["d"]).bbox()
        return np.array([[xmin, ymin], [xmax, ymax]])
    if tag == "text":
        return np.array([[_f(node, "x"), _f(node, "y")]])
    return np.empty((0, 2))


def node_points(node: Node, parent: NDArray[np.float64] | None = None) -> NDArray[np.float64]:
    """Extreme points of a node subtree, transforms applied."""
    matrix = parent if parent is not None else np.eye(3)
    matrix = matrix @ parse_transform(node.attrs.get("transform"))

    chunks = []
    own = _own_points(node)
    if len(own):
        homogeneous = np.hstack([own, np.ones((len(own), 1))])
        chunks.append((homogeneous @ matrix.T)[:, :2])
    for child in node.children:
        pts = node_points(child, matrix)
        if len(pts):
            chunks.append(pts)
    return np.vstack(chunks) if chunks else np.empty((0, 2))


def node_bounds(node: Node) -> tuple[float, float, float, float]:
    return bbox(node_points(node))


def within_viewbox(
    bounds: tuple[float, float, float, float],
    viewbox: tuple[float, float, float, float],
    tol: float = 1e-6,
) -> bool:
    xmin, ymin, xmax, ymax = bounds
    vx, vy, vw, vh = viewbox
    return xmin >= vx - tol and ymin >= vy - tol and xmax <= vx + vw + tol and ymax <= vy + vh + tol
