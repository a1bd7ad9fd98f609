"""Settings persistence — last-session store plus settings/defaults files.

``initialize_settings`` decides where a display's starting settings come
from, in order: the previous session saved in a store, a ``settings.json``
next to the app, a ``defaults.json`` next to the app, and finally the
display's own hardcoded defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from pieceworks.engine.display import Display
from pieceworks.errors import MalformedSettingsError
from pieceworks.models.settings_document import SettingsDocument
from pieceworks.persistence.settings_manager import (
    apply_settings,
    create_settings_document,
    load_settings_document,
    settings_to_json,
)

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"
DEFAULTS_FILE = "defaults.json"


class SettingsStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store, one instance per process."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def delete(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class FileStore:
    """One JSON file per key under ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def storage_key(kind: str) -> str:
    return f"{kind}-last-settings"


def save_last_settings(display: Display, store: SettingsStore) -> SettingsDocument:
    document = create_settings_document(display)
    store.set(storage_key(display.kind), settings_to_json(document))
    logger.debug("Saved last settings for %s", display.kind)
    return document


def load_settings_from_store(display: Display, store: SettingsStore) -> bool:
    """Apply the previous session's settings. False when none or unreadable."""
    raw = store.get(storage_key(display.kind))
    if raw is None:
        return False
    try:
        document = load_settings_document(raw)
    except MalformedSettingsError as e:
        logger.error("Error loading settings from store: %s", e)
        return False
    apply_settings(document, display)
    return True


def load_settings_from_file(path: str | Path, display: Display) -> SettingsDocument:
    """Read and apply a JSON settings file. Raises MalformedSettingsError."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedSettingsError(f"Cannot read {path}: {e}") from e
    document = load_settings_document(text)
    apply_settings(document, display)
    return document


def _try_file(path: Path, display: Display) -> bool:
    if not path.is_file():
        logger.debug("No settings file at %s", path)
        return False
    try:
        load_settings_from_file(path, display)
    except MalformedSettingsError as e:
        logger.error("Error loading settings from %s: %s", path.name, e)
        return False
    return True


def initialize_settings(
    display: Display,
    store: SettingsStore | None = None,
    search_dir: str | Path | None = None,
) -> dict[str, Any]:
    """Load the display's starting settings and report where they came from."""
    source = "hardcoded defaults"
    loaded = False

    if store is not None and load_settings_from_store(display, store):
        source, loaded = "previous session", True
    elif search_dir is not None:
        directory = Path(search_dir)
        if _try_file(directory / SETTINGS_FILE, display):
            source, loaded = "user settings file", True
        elif _try_file(directory / DEFAULTS_FILE, display):
            source, loaded = "factory defaults file", True

    logger.info("Settings initialized from: %s", source)
    return {"source": source, "loaded": loaded}


def dump_document(document: SettingsDocument, path: str | Path) -> Path:
    """Write a settings document as pretty JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings_to_json(document), encoding="utf-8")
    return path
