"""State tables — a display's discrete state → visible primitive ids."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateTable:
    """Static, finite mapping of state value → primitive ids shown in that state.

    ``fallback`` replaces any value outside ``visible``. ``parse`` turns other
    representations (metadata text, ints for digit faces) into a state value.
    """

    key: str
    visible: Mapping[Any, frozenset[str]]
    default: Any
    fallback: Any
    parse: Callable[[Any], Any] | None = None
    labels: Mapping[Any, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.default not in self.visible:
            raise ValueError(f"Default state {self.default!r} not declared for {self.key}")
        if self.fallback not in self.visible:
            raise ValueError(f"Fallback state {self.fallback!r} not declared for {self.key}")

    @property
    def states(self) -> list[Any]:
        return list(self.visible)

    def is_valid(self, state: Any) -> bool:
        try:
            return state in self.visible
        except TypeError:
            # Unhashable input can never be a declared state
            return False

    def normalize(self, state: Any) -> Any:
        """Return ``state`` if declared, otherwise warn and return the fallback."""
        if self.parse is not None and not self.is_valid(state):
            try:
                state = self.parse(state)
            except (TypeError, ValueError):
                pass
        if self.is_valid(state):
            # Canonical declared value (1 → True for boolean tables)
            return next(k for k in self.visible if k == state)
        logger.warning("Invalid %s: %r. Using %r instead.", self.key, state, self.fallback)
        return self.fallback

    def visible_ids(self, state: Any) -> frozenset[str]:
        return self.visible[self.normalize(state)]

    def all_ids(self) -> set[str]:
        ids: set[str] = set()
        for group in self.visible.values():
            ids |= group
        return ids

    def label(self, state: Any) -> str:
        return self.labels.get(state, str(state))


def table(
    key: str,
    mapping: Mapping[Any, Iterable[str]],
    *,
    default: Any,
    fallback: Any,
    always: Iterable[str] = (),
    **kwargs: Any,
) -> StateTable:
    """Build a StateTable from plain iterables of ids; ``always`` joins every state."""
    shared = frozenset(always)
    return StateTable(
        key=key,
        visible={state: frozenset(ids) | shared for state, ids in mapping.items()},
        default=default,
        fallback=fallback,
        **kwargs,
    )


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no", ""):
        return False
    raise ValueError(f"Not a boolean: {value!r}")
