"""Primitive + display registries.

Every display subtype declares its primitives once, up front:

    registry = PrimitiveRegistry()
    registry.register(PrimitiveSpec(
        id="a",
        shape=lambda o: el("path", d="M8,5 L42,5 L42,15 L8,15 Z"),
        style=lambda o: {"": {"fill": o["foregroundColor"]}},
        classes=("segment", "a"),
    ))
    registry.freeze()

Display classes register themselves by kind via ``@display_type``, so adding a
new asset family = creating one module with the decorator.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from pieceworks.errors import UnknownPrimitiveError

if TYPE_CHECKING:
    from pieceworks.engine.display import Display
    from pieceworks.engine.options import OptionSet
    from pieceworks.engine.scene import Node

logger = logging.getLogger(__name__)

ShapeFn = Callable[["OptionSet"], "Node"]
StyleFn = Callable[["OptionSet"], dict[str, dict[str, Any]]]
MountFn = Callable[["OptionSet", Any], bool]


def _no_style(options: OptionSet) -> dict[str, dict[str, Any]]:
    return {}


@dataclass(frozen=True)
class PrimitiveSpec:
    id: str
    shape: ShapeFn
    style: StyleFn = _no_style
    # None = always mounted
    when: MountFn | None = None
    classes: tuple[str, ...] = ()
    description: str = ""

    def mounted_for(self, options: OptionSet, state: Any) -> bool:
        return self.when is None or bool(self.when(options, state))


class PrimitiveRegistry:
    """Closed, ordered set of primitives for one display subtype."""

    def __init__(self, specs: Iterable[PrimitiveSpec] = ()) -> None:
        self._specs: dict[str, PrimitiveSpec] = {}
        self._frozen = False
        for spec in specs:
            self.register(spec)

    def register(self, spec: PrimitiveSpec) -> None:
        if self._frozen:
            raise ValueError(f"Registry is frozen; cannot add primitive {spec.id}")
        if spec.id in self._specs:
            raise ValueError(f"Duplicate primitive ID: {spec.id}")
        self._specs[spec.id] = spec
        logger.debug("Registered primitive %s", spec.id)

    def freeze(self) -> PrimitiveRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, primitive_id: str) -> PrimitiveSpec:
        try:
            return self._specs[primitive_id]
        except KeyError:
            raise UnknownPrimitiveError(primitive_id) from None

    def __contains__(self, primitive_id: object) -> bool:
        return primitive_id in self._specs

    def all(self) -> list[PrimitiveSpec]:
        return list(self._specs.values())

    @property
    def ids(self) -> list[str]:
        return list(self._specs)

    def check_ids(self, ids: Iterable[str]) -> None:
        """Fail loudly on ids a state table references but nobody registered."""
        for pid in ids:
            if pid not in self._specs:
                raise UnknownPrimitiveError(pid)

    @property
    def count(self) -> int:
        return len(self._specs)


@dataclass
class DisplayTypeSpec:
    kind: str
    name: str
    cls: type[Display]
    tags: set[str] = field(default_factory=set)


class DisplayTypeRegistry:
    """Singleton registry of all display classes, keyed by kind."""

    def __init__(self) -> None:
        self._types: dict[str, DisplayTypeSpec] = {}

    def register(self, spec: DisplayTypeSpec) -> None:
        if spec.kind in self._types:
            raise ValueError(f"Duplicate display kind: {spec.kind}")
        self._types[spec.kind] = spec
        logger.debug("Registered display type %s (%s)", spec.kind, spec.cls.__name__)

    def get(self, kind: str) -> DisplayTypeSpec:
        return self._types[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self._types

    def all(self) -> list[DisplayTypeSpec]:
        return sorted(self._types.values(), key=lambda s: s.kind)

    @property
    def count(self) -> int:
        return len(self._types)


# Module-level singleton
_display_types = DisplayTypeRegistry()


def get_display_registry() -> DisplayTypeRegistry:
    return _display_types


def display_type(*, kind: str, name: str, tags: set[str] | None = None):
    """Decorator to register a display class under a kind."""

    def decorator(cls):
        cls.kind = kind
        cls.generator_name = name
        _display_types.register(DisplayTypeSpec(kind=kind, name=name, cls=cls, tags=tags or set()))
        return cls

    return decorator
