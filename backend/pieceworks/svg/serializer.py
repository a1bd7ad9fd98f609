"""SVG serializer — scene → standalone, self-describing SVG document."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any
from xml.sax.saxutils import escape

from pieceworks.engine.scene import Node, Scene, format_value

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
_ATTR_ENTITIES = {'"': "&quot;"}
_TAG_NAME_RE = re.compile(r"^[A-Za-z_][\w.-]*$")


def _attr_text(attrs: Mapping[str, Any]) -> str:
    return "".join(f' {k}="{escape(format_value(v), _ATTR_ENTITIES)}"' for k, v in attrs.items())


def serialize_node(node: Node, depth: int = 1) -> list[str]:
    """One element (and its children) as indented lines."""
    pad = "  " * depth
    attrs = _attr_text(node.attrs)
    if not node.children and not node.text:
        return [f"{pad}<{node.tag}{attrs} />"]
    if not node.children:
        return [f"{pad}<{node.tag}{attrs}>{escape(node.text)}</{node.tag}>"]

    lines = [f"{pad}<{node.tag}{attrs}>"]
    if node.text:
        lines.append(f"{pad}  {escape(node.text)}")
    for child in node.children:
        lines.extend(serialize_node(child, depth + 1))
    lines.append(f"{pad}</{node.tag}>")
    return lines


def _type_hint(value: Any) -> str | None:
    # Untagged fields read back as text
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return None


def serialize_metadata(settings: Mapping[str, Any], depth: int = 1) -> list[str]:
    """``<metadata><settings>`` block, one tag per field in order.

    Boolean and numeric fields carry a ``type`` attribute so fields without a
    default still read back with their type.
    """
    pad = "  " * depth
    lines = [f"{pad}<metadata>", f"{pad}  <settings>"]
    for key, value in settings.items():
        if not _TAG_NAME_RE.match(key):
            logger.warning("Skipping setting %r: not a valid XML tag name", key)
            continue
        hint = _type_hint(value)
        type_attr = f' type="{hint}"' if hint else ""
        lines.append(f"{pad}    <{key}{type_attr}>{escape(format_value(value))}</{key}>")
    lines.append(f"{pad}  </settings>")
    lines.append(f"{pad}</metadata>")
    return lines


def serialize_styles(styles: Mapping[str, Mapping[str, Any]], depth: int = 1) -> list[str]:
    pad = "  " * depth
    lines = [f"{pad}<style>"]
    for selector, props in styles.items():
        body = " ".join(f"{k}: {format_value(v)};" for k, v in props.items())
        lines.append(f"{pad}  {selector} {{ {escape(body)} }}")
    lines.append(f"{pad}</style>")
    return lines


def serialize_document(
    root_attrs: Mapping[str, Any],
    body: Iterable[Node],
    defs: Iterable[Node] = (),
    settings: Mapping[str, Any] | None = None,
    styles: Mapping[str, Mapping[str, Any]] | None = None,
    title: str = "",
) -> str:
    """Generate SVG markup: declaration, root, defs, body, metadata, style."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="{SVG_NS}"{_attr_text(root_attrs)}>',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    defs = list(defs)
    if defs:
        lines.append("  <defs>")
        for node in defs:
            lines.extend(serialize_node(node, depth=2))
        lines.append("  </defs>")

    for node in body:
        lines.extend(serialize_node(node))

    if settings:
        lines.extend(serialize_metadata(settings))
    if styles:
        lines.extend(serialize_styles(styles))

    lines.append("</svg>")
    return "\n".join(lines)


def serialize_scene(
    scene: Scene,
    settings: Mapping[str, Any] | None = None,
    styles: Mapping[str, Mapping[str, Any]] | None = None,
    title: str = "",
) -> str:
    """Serialize every mounted primitive, hidden ones included."""
    body = []
    for mounted in scene.primitives:
        node = mounted.node
        if "id" not in node.attrs:
            node = node.clone()
            node.attrs = {"id": mounted.id, **node.attrs}
        body.append(node)
    return serialize_document(
        scene.root_attributes(),
        body,
        defs=scene.defs,
        settings=settings,
        styles=styles,
        title=title,
    )
