"""Display base class — one options set, one scene, one state per instance.

Subtypes declare their DEFAULTS, VIEWBOX, STATE_TABLE and build their
primitive registry; everything else (option merging, re-rendering on change,
resizing, export) lives here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from pieceworks.engine.options import OptionSet, create_options
from pieceworks.engine.registry import PrimitiveRegistry
from pieceworks.engine.render import Renderer, hide_with_display
from pieceworks.engine.scene import Node, Scene, Surface
from pieceworks.engine.states import StateTable
from pieceworks.errors import MissingMountPointError

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class Display:
    """Base class for every parameterized asset."""

    # Set by @display_type
    kind: ClassVar[str] = ""
    generator_name: ClassVar[str] = ""

    # Value written to settings documents as content.displayType
    display_type_name: ClassVar[str] = ""
    DEFAULTS: ClassVar[dict[str, Any]] = {}
    VIEWBOX: ClassVar[tuple[float, float, float, float]] = (0, 0, 100, 100)
    # One key = square-ish sizing from the viewBox aspect; two keys = width, height
    SIZE_KEYS: ClassVar[tuple[str, ...]] = ("size",)
    STATE_TABLE: ClassVar[StateTable]
    # Options whose change needs a full rebuild rather than a style refresh
    STRUCTURAL_OPTIONS: ClassVar[frozenset[str]] = frozenset()
    # True when the state decides which primitives are mounted at all
    STATE_IS_STRUCTURAL: ClassVar[bool] = False
    # Options drawn from a fixed set of values; anything else draws the first
    CHOICE_OPTIONS: ClassVar[dict[str, tuple[str, ...]]] = {}

    def __init__(
        self,
        surface: Surface | None,
        options: Mapping[str, Any] | None = None,
        state: Any = _UNSET,
    ) -> None:
        if surface is None:
            raise MissingMountPointError(f"{type(self).__name__} needs a surface to render into")
        self.surface = surface
        self.options: OptionSet = create_options(options, self.DEFAULTS)
        self._check_choices(self.CHOICE_OPTIONS)

        if state is _UNSET:
            state = self.options[self.state_key] if self.mirrors_state else self.STATE_TABLE.default
        self._state = self.STATE_TABLE.normalize(state)
        self._mirror_state()

        self.renderer = Renderer(self.primitive_registry(), self.STATE_TABLE, self)
        self.init()

    # --- Class-level declarations ---

    @classmethod
    def build_registry(cls) -> PrimitiveRegistry:
        raise NotImplementedError

    @classmethod
    def primitive_registry(cls) -> PrimitiveRegistry:
        """The subtype's frozen registry, built once per class."""
        registry = cls.__dict__.get("_primitive_registry")
        if registry is None:
            registry = cls.build_registry().freeze()
            cls._primitive_registry = registry
        return registry

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        return dict(cls.DEFAULTS)

    # --- Render hooks ---

    @property
    def viewbox(self) -> tuple[float, float, float, float]:
        return self.VIEWBOX

    def root_size(self, options: OptionSet) -> tuple[float, float]:
        if len(self.SIZE_KEYS) == 2:
            w_key, h_key = self.SIZE_KEYS
            return float(options[w_key]), float(options[h_key])
        size = float(options[self.SIZE_KEYS[0]])
        _, _, vb_w, vb_h = self.VIEWBOX
        return size, size * vb_h / vb_w

    def build_defs(self, options: OptionSet) -> list[Node]:
        return []

    def root_classes(self, options: OptionSet, state: Any) -> list[str]:
        return []

    def visibility_attributes(self, options: OptionSet, primitive_id: str, visible: bool) -> dict[str, Any]:
        return hide_with_display(options, primitive_id, visible)

    def stylesheet(self, options: OptionSet) -> dict[str, dict[str, Any]]:
        """CSS rules (selector → properties) embedded in exported documents."""
        return {}

    # --- State ---

    @property
    def state_key(self) -> str:
        return self.STATE_TABLE.key

    @property
    def mirrors_state(self) -> bool:
        """Whether the state also lives in the options under the same key."""
        return self.STATE_TABLE.key in self.DEFAULTS

    @property
    def state(self) -> Any:
        return self._state

    def _mirror_state(self) -> None:
        if self.mirrors_state:
            self.options[self.state_key] = self._state

    def _check_choices(self, keys: Iterable[str]) -> None:
        for key in keys:
            choices = self.CHOICE_OPTIONS.get(key)
            if choices and self.options[key] not in choices:
                logger.warning("Unknown %s %r, drawing %s", key, self.options[key], choices[0])

    # --- Lifecycle ---

    @property
    def scene(self) -> Scene:
        return self.surface.scene

    def init(self) -> None:
        """Tear down and rebuild the whole scene."""
        self.renderer.render(self.scene, self.options, self._state)

    render = init

    def update_styles(self) -> None:
        self.renderer.update_styles(self.scene, self.options, self._state)

    def set_option(self, key: str, value: Any) -> None:
        if self.mirrors_state and key == self.state_key:
            self.set_state(value)
            return
        self.options[key] = value
        self._check_choices((key,))
        if key in self.STRUCTURAL_OPTIONS:
            self.render()
        else:
            self.update_styles()

    def set_options(self, values: Mapping[str, Any]) -> None:
        values = dict(values)
        state = values.pop(self.state_key, _UNSET) if self.mirrors_state else _UNSET
        self.options.merge(values)
        self._check_choices(values)
        if state is not _UNSET:
            self._state = self.STATE_TABLE.normalize(state)
            self._mirror_state()
        if (state is not _UNSET and self.STATE_IS_STRUCTURAL) or self.STRUCTURAL_OPTIONS.intersection(values):
            self.render()
        else:
            self.update_styles()

    def set_state(self, state: Any) -> None:
        self._state = self.STATE_TABLE.normalize(state)
        self._mirror_state()
        if self.STATE_IS_STRUCTURAL:
            self.render()
        else:
            self.renderer.apply_state(self.scene, self.options, self._state)

    def resize(self, width: float, height: float | None = None) -> None:
        """Change the root size; geometry stays in viewBox coordinates.

        Displays sized by a single key take ``width`` and derive the height
        from the viewBox aspect, so ``height`` is ignored there.
        """
        if len(self.SIZE_KEYS) == 2:
            w_key, h_key = self.SIZE_KEYS
            if height is None:
                _, _, vb_w, vb_h = self.VIEWBOX
                height = width * vb_h / vb_w
            self.options[w_key] = width
            self.options[h_key] = height
        else:
            if height is not None:
                logger.debug("%s is sized by %s alone, ignoring height=%r", self.kind, self.SIZE_KEYS[0], height)
            self.options[self.SIZE_KEYS[0]] = width
        self.update_styles()

    @property
    def size(self) -> tuple[float, float]:
        return self.root_size(self.options)

    def visible_ids(self) -> frozenset[str]:
        return self.STATE_TABLE.visible_ids(self._state)

    def primitive_bounds(self) -> dict[str, tuple[float, float, float, float]]:
        """Bounds of every mounted primitive, in viewBox coordinates."""
        from pieceworks.utils.geometry import node_bounds

        return {mounted.id: node_bounds(mounted.node) for mounted in self.scene.primitives}

    # --- Export ---

    def export_settings_fields(self) -> dict[str, Any]:
        """Flat settings for embedded metadata: state key first, then every option once."""
        fields: dict[str, Any] = {self.state_key: self._state}
        for key, value in self.options.items():
            if key != self.state_key:
                fields[key] = value
        return fields

    def export_vector(self) -> str:
        from pieceworks.svg.serializer import serialize_scene

        svg = serialize_scene(
            self.scene,
            settings=self.export_settings_fields(),
            styles=self.stylesheet(self.options),
        )
        logger.info("Exported %s (%s=%r) as SVG, %d bytes", self.kind, self.state_key, self._state, len(svg))
        return svg

    async def export_raster(
        self,
        scale: float = 2,
        format: str = "png",
        quality: int = 92,
        timeout: float | None = None,
        cancel: Any = None,
    ) -> str:
        """Rasterize the exported vector document; returns a data URI."""
        from pieceworks.export.raster import rasterize

        width, height = self.size
        return await rasterize(
            self.export_vector(),
            width=round(width * scale),
            height=round(height * scale),
            format=format,
            quality=quality,
            timeout=timeout,
            cancel=cancel,
        )

    def export_filename(self, extension: str = "svg") -> str:
        label = self.STATE_TABLE.label(self._state)
        return f"{self.kind}-{label}.{extension}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.state_key}={self._state!r})"
