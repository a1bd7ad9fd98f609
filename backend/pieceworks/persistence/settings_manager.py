"""Settings documents — build, apply, import and export display settings.

A settings document captures a display completely: ``content`` holds the
state (under the display's state key) and the display type name,
``appearance`` the full option set, ``generator`` the producing generator and
version. ``import_settings`` accepts either the JSON document or an exported
SVG carrying a ``<metadata><settings>`` block.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet, create_options
from pieceworks.errors import MalformedSettingsError
from pieceworks.models.settings_document import (
    GeneratorInfo,
    SettingsDocument,
    SettingsMeta,
    VersionDetails,
)
from pieceworks.svg.parser import parse_exported_svg, split_settings

logger = logging.getLogger(__name__)

VERSION = (1, 0, 0)
VERSION_STRING = ".".join(str(part) for part in VERSION)
# Stamped once per process
BUILD_DATE = datetime.now(timezone.utc).isoformat()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def generator_info(display_cls: type[Display]) -> GeneratorInfo:
    major, minor, patch = VERSION
    return GeneratorInfo(
        name=display_cls.generator_name,
        version=VERSION_STRING,
        version_details=VersionDetails(major=major, minor=minor, patch=patch, string=VERSION_STRING),
        build_date=BUILD_DATE,
    )


def _content(display_cls: type[Display], state: Any) -> dict[str, Any]:
    return {display_cls.STATE_TABLE.key: state, "displayType": display_cls.display_type_name}


def generate_metadata(display: Display) -> SettingsDocument:
    """Snapshot the display's state and options, without a meta block."""
    cls = type(display)
    return SettingsDocument(
        content=_content(cls, display.state),
        appearance=display.options.to_dict(),
        generator=generator_info(cls),
    )


def create_settings_document(display: Display) -> SettingsDocument:
    document = generate_metadata(display)
    document.meta = SettingsMeta(type="user-settings", last_modified=_now(), description="User settings")
    return document


def create_defaults_document(display_cls: type[Display]) -> SettingsDocument:
    """Factory defaults: default options plus the state table's default state."""
    return SettingsDocument(
        content=_content(display_cls, display_cls.STATE_TABLE.default),
        appearance=display_cls.defaults(),
        generator=generator_info(display_cls),
        meta=SettingsMeta(
            type="defaults",
            description=f"Factory default settings for the {display_cls.generator_name}",
        ),
    )


def settings_to_json(document: SettingsDocument) -> str:
    return json.dumps(document.to_json_dict(), indent=2)


def export_settings(display: Display) -> str:
    return settings_to_json(create_settings_document(display))


def load_settings_document(text: str | bytes) -> SettingsDocument:
    """Parse a JSON settings document. Raises MalformedSettingsError."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSettingsError(f"Settings are not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedSettingsError("Settings document must be a JSON object")
    missing = [section for section in ("content", "appearance", "generator") if section not in data]
    if missing:
        raise MalformedSettingsError(f"Settings document is missing: {', '.join(missing)}")
    try:
        return SettingsDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedSettingsError(f"Invalid settings document: {e}") from e


def document_from_svg(svg_text: str, display_cls: type[Display]) -> SettingsDocument:
    """Rebuild a settings document from the metadata of an exported SVG."""
    parsed = parse_exported_svg(svg_text)
    if not parsed.settings:
        raise MalformedSettingsError("SVG carries no embedded settings")
    options, state = split_settings(
        parsed.settings, display_cls.DEFAULTS, display_cls.STATE_TABLE.key, parsed.setting_types
    )
    state_value = display_cls.STATE_TABLE.normalize(state if state is not None else display_cls.STATE_TABLE.default)
    document = SettingsDocument(
        content=_content(display_cls, state_value),
        appearance=options,
        generator=generator_info(display_cls),
        meta=SettingsMeta(type="user-settings", description="Imported from SVG"),
    )
    return document


def parse_settings(text: str | bytes, display_cls: type[Display]) -> SettingsDocument:
    """Accept either a JSON settings document or an exported SVG."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    if text.lstrip().startswith("<"):
        return document_from_svg(text, display_cls)
    document = load_settings_document(text)
    display_type = document.content.get("displayType")
    if display_type and display_type != display_cls.display_type_name:
        logger.warning(
            "Settings were written for %r, loading them into %r",
            display_type,
            display_cls.display_type_name,
        )
    return document


def document_state(document: SettingsDocument, display_cls: type[Display]) -> Any:
    """The normalized state a document describes (content first, then appearance)."""
    key = display_cls.STATE_TABLE.key
    if key in document.content:
        raw = document.content[key]
    else:
        raw = document.appearance.get(key, display_cls.STATE_TABLE.default)
    return display_cls.STATE_TABLE.normalize(raw)


def import_settings(text: str | bytes, display_cls: type[Display]) -> tuple[OptionSet, Any]:
    """Settings text → (options, state) for ``display_cls``.

    Feeding the result of ``export_settings`` back in reproduces the
    display's options and state exactly.
    """
    document = parse_settings(text, display_cls)
    state = document_state(document, display_cls)
    options = create_options(document.appearance, display_cls.DEFAULTS)
    if display_cls.STATE_TABLE.key in display_cls.DEFAULTS:
        options[display_cls.STATE_TABLE.key] = state
    return options, state


def apply_settings(document: SettingsDocument, display: Display) -> Display:
    """Content state first, then every appearance value through set_option."""
    key = display.state_key
    has_state = key in document.content
    if has_state:
        display.set_state(document.content[key])
    for option, value in document.appearance.items():
        if value is None:
            continue
        if has_state and option == key:
            continue
        display.set_option(option, value)
    logger.debug("Applied settings to %r", display)
    return display
