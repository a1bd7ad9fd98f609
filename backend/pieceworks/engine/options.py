"""Option model — a display's complete, defaulted appearance configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

logger = logging.getLogger(__name__)


class OptionSet(MutableMapping[str, Any]):
    """Ordered option name → primitive value mapping.

    Keys from the defaults come first in declaration order, unknown keys
    follow in insertion order. Values are stored as given (no range checks).
    """

    def __init__(self, defaults: Mapping[str, Any], values: Mapping[str, Any] | None = None) -> None:
        self._defaults = dict(defaults)
        self._values: dict[str, Any] = dict(self._defaults)
        if values:
            self._values.update(values)

    # --- MutableMapping protocol ---

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in self._defaults and key not in self._values:
            logger.debug("Storing unrecognised option %r", key)
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        if key in self._defaults:
            # Recognised options always carry a value
            self._values[key] = self._defaults[key]
        else:
            del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"OptionSet({self._values!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OptionSet):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    # --- Option-specific helpers ---

    @property
    def defaults(self) -> dict[str, Any]:
        return dict(self._defaults)

    def is_known(self, key: str) -> bool:
        return key in self._defaults

    def unknown_keys(self) -> list[str]:
        return [k for k in self._values if k not in self._defaults]

    def set(self, key: str, value: Any) -> OptionSet:
        """Point update; returns self."""
        self[key] = value
        return self

    def merge(self, overrides: Mapping[str, Any]) -> OptionSet:
        """Right-biased shallow merge in place; returns self."""
        for key, value in overrides.items():
            self[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)


def create_options(
    overrides: Mapping[str, Any] | None,
    defaults: Mapping[str, Any],
) -> OptionSet:
    """Build a complete OptionSet: every default present, overrides win."""
    return OptionSet(defaults, overrides or {})
