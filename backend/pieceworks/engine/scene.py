"""Scene graph — the mounted primitives and root sizing of one display.

Per-primitive geometry + style → MountedPrimitive.node
Root sizing, classes, defs → Scene.*
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


def format_value(value: Any) -> str:
    """Render an option or attribute value the way it appears in SVG text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


@dataclass
class Node:
    """One vector element (``rect``, ``path``, ``g``, ...)."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    text: str = ""
    # Style recipes address nodes by role; "" is the primitive's root node
    role: str = ""

    def set(self, name: str, value: Any) -> Node:
        self.attrs[name] = format_value(value)
        return self

    def update(self, attrs: dict[str, Any]) -> Node:
        for name, value in attrs.items():
            if value is None:
                self.attrs.pop(name, None)
            else:
                self.attrs[name] = format_value(value)
        return self

    def append(self, child: Node) -> Node:
        self.children.append(child)
        return child

    def walk(self) -> Iterator[Node]:
        yield self
        for child in self.children:
            yield from child.walk()

    def with_role(self, role: str) -> list[Node]:
        return [n for n in self.walk() if n.role == role]

    def clone(self) -> Node:
        return copy.deepcopy(self)


def el(tag: str, role: str = "", text: str = "", children: list[Node] | None = None, **attrs: Any) -> Node:
    """Shorthand node constructor. Underscores in attribute names become dashes."""
    node = Node(tag=tag, role=role, text=text, children=list(children or []))
    for name, value in attrs.items():
        node.set(name.rstrip("_").replace("_", "-"), value)
    return node


@dataclass
class MountedPrimitive:
    """A registered primitive instantiated under the scene root."""

    id: str
    node: Node
    visible: bool = True
    classes: list[str] = field(default_factory=list)


@dataclass
class Scene:
    """Everything currently mounted for a single display."""

    width: float = 100.0
    height: float = 100.0
    viewbox: tuple[float, float, float, float] = (0.0, 0.0, 100.0, 100.0)
    root_classes: list[str] = field(default_factory=list)
    defs: list[Node] = field(default_factory=list)
    primitives: list[MountedPrimitive] = field(default_factory=list)

    def clear(self) -> None:
        self.root_classes.clear()
        self.defs.clear()
        self.primitives.clear()

    def mount(self, primitive: MountedPrimitive) -> MountedPrimitive:
        self.primitives.append(primitive)
        return primitive

    def get(self, primitive_id: str) -> MountedPrimitive | None:
        for p in self.primitives:
            if p.id == primitive_id:
                return p
        return None

    @property
    def mounted_ids(self) -> list[str]:
        return [p.id for p in self.primitives]

    @property
    def visible_ids(self) -> set[str]:
        return {p.id for p in self.primitives if p.visible}

    @property
    def hidden_ids(self) -> set[str]:
        return {p.id for p in self.primitives if not p.visible}

    @property
    def viewbox_text(self) -> str:
        return " ".join(format_value(float(v)) for v in self.viewbox)

    def root_attributes(self) -> dict[str, str]:
        attrs = {
            "width": format_value(self.width),
            "height": format_value(self.height),
            "viewBox": self.viewbox_text,
        }
        if self.root_classes:
            attrs["class"] = " ".join(self.root_classes)
        return attrs

    def snapshot(self) -> tuple:
        """Hashable picture of the scene, for comparing two renders."""

        def _node_key(n: Node) -> tuple:
            return (n.tag, tuple(sorted(n.attrs.items())), n.text, tuple(_node_key(c) for c in n.children))

        return (
            self.width,
            self.height,
            self.viewbox,
            tuple(self.root_classes),
            tuple(_node_key(d) for d in self.defs),
            tuple((p.id, p.visible, tuple(p.classes), _node_key(p.node)) for p in self.primitives),
        )

    def clone(self) -> Scene:
        return copy.deepcopy(self)


class Surface:
    """Mount point handed to a display; the display renders its scene here.

    The engine never creates top-level surfaces on its own — callers do, and
    may hold several independent ones (e.g. one per board square).
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.scene = Scene()

    def __repr__(self) -> str:
        return f"Surface({self.name!r}, {len(self.scene.primitives)} primitives)"
