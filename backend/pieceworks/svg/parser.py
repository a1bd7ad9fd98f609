"""Exported SVG parser — reads sizing and embedded settings back out.

Documents written by ``serialize_scene`` carry their complete settings in a
``<metadata><settings>`` block, one tag per field. Everything there is text;
``coerce_settings`` turns it back into the types the defaults declare.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pieceworks.engine.states import parse_bool
from pieceworks.errors import MalformedSettingsError

logger = logging.getLogger(__name__)

# Regex for extracting viewBox
_VIEWBOX_RE = re.compile(r'viewBox\s*=\s*"([^"]+)"')
_LENGTH_RE = re.compile(r"^\s*([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)\s*(px|pt)?\s*$")
_INT_RE = re.compile(r"^[-+]?\d+$")


@dataclass
class ExportedSvg:
    width: float | None = None
    height: float | None = None
    viewbox: tuple[float, float, float, float] | None = None
    classes: list[str] = field(default_factory=list)
    settings: dict[str, str] = field(default_factory=dict)
    # "boolean" or "number" where the exporter tagged the field
    setting_types: dict[str, str] = field(default_factory=dict)
    primitive_ids: list[str] = field(default_factory=list)
    hidden_ids: list[str] = field(default_factory=list)


def _strip_ns(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def _length(text: str | None) -> float | None:
    if not text:
        return None
    m = _LENGTH_RE.match(text)
    return float(m.group(1)) if m else None


def parse_exported_svg(svg_text: str) -> ExportedSvg:
    """Parse an exported document. Raises MalformedSettingsError on bad XML."""
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise MalformedSettingsError(f"Not a well-formed SVG document: {e}") from e
    if _strip_ns(root.tag) != "svg":
        raise MalformedSettingsError("No <svg> root element found.")

    doc = ExportedSvg(
        width=_length(root.get("width")),
        height=_length(root.get("height")),
        classes=(root.get("class") or "").split(),
    )

    vb_match = _VIEWBOX_RE.search(svg_text)
    if vb_match:
        parts = vb_match.group(1).replace(",", " ").split()
        if len(parts) == 4:
            try:
                doc.viewbox = tuple(float(p) for p in parts)  # type: ignore[assignment]
            except ValueError:
                logger.warning("Ignoring malformed viewBox %r", vb_match.group(1))

    for child in root:
        tag = _strip_ns(child.tag)
        if tag == "metadata":
            for settings in child:
                if _strip_ns(settings.tag) != "settings":
                    continue
                for entry in settings:
                    key = _strip_ns(entry.tag)
                    doc.settings[key] = entry.text or ""
                    if entry.get("type"):
                        doc.setting_types[key] = entry.get("type")
        elif tag not in ("defs", "style", "title", "desc") and child.get("id"):
            doc.primitive_ids.append(child.get("id"))
            if "off" in (child.get("class") or "").split():
                doc.hidden_ids.append(child.get("id"))

    return doc


def _number(text: str) -> int | float:
    return int(text) if _INT_RE.match(text.strip()) else float(text)


def coerce_value(text: str, default: Any = None, type_hint: str | None = None) -> Any:
    """Convert metadata text to the type of ``default``.

    Other fields follow the exporter's ``type_hint``; untagged ones stay text
    exactly as written.
    """
    if isinstance(default, bool):
        return parse_bool(text)
    if isinstance(default, (int, float)):
        return _number(text) if isinstance(default, int) else float(text)
    if type_hint == "boolean":
        return parse_bool(text)
    if type_hint == "number":
        return _number(text)
    return text


def coerce_settings(
    raw: Mapping[str, str],
    defaults: Mapping[str, Any],
    types: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Coerce every field of a parsed settings block."""
    types = types or {}
    coerced: dict[str, Any] = {}
    for key, text in raw.items():
        try:
            coerced[key] = coerce_value(text, defaults.get(key), types.get(key))
        except ValueError:
            logger.warning("Setting %s=%r does not match its default's type; keeping text", key, text)
            coerced[key] = text
    return coerced


def split_settings(
    raw: Mapping[str, str],
    defaults: Mapping[str, Any],
    state_key: str,
    types: Mapping[str, str] | None = None,
) -> tuple[dict[str, Any], str | None]:
    """Separate the state field from the option fields of a settings block.

    The state stays as text (the display's state table parses it); when the
    state key is itself an option it is also kept in the options.
    """
    state = raw.get(state_key)
    option_fields = {k: v for k, v in raw.items() if k != state_key or state_key in defaults}
    return coerce_settings(option_fields, defaults, types), state
