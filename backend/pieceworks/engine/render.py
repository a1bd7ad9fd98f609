"""Render engine — full scene rebuilds and cheap style-only refreshes."""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

from pieceworks.engine.options import OptionSet
from pieceworks.engine.registry import PrimitiveRegistry
from pieceworks.engine.scene import MountedPrimitive, Node, Scene
from pieceworks.engine.states import StateTable

logger = logging.getLogger(__name__)


class RenderHooks(Protocol):
    """Per-subtype pieces of the render that are not primitives."""

    viewbox: tuple[float, float, float, float]

    def root_size(self, options: OptionSet) -> tuple[float, float]: ...

    def build_defs(self, options: OptionSet) -> list[Node]: ...

    def root_classes(self, options: OptionSet, state: Any) -> list[str]: ...

    def visibility_attributes(self, options: OptionSet, primitive_id: str, visible: bool) -> dict[str, Any]: ...


def hide_with_display(options: OptionSet, primitive_id: str, visible: bool) -> dict[str, Any]:
    """Default presentation: hidden primitives stay mounted with display="none"."""
    return {"display": None} if visible else {"display": "none"}


class Renderer:
    """Builds a display's scene from its registry, state table and options."""

    def __init__(
        self,
        registry: PrimitiveRegistry,
        states: StateTable,
        hooks: RenderHooks,
    ) -> None:
        self.registry = registry
        self.states = states
        self.hooks = hooks

    def render(self, scene: Scene, options: OptionSet, state: Any) -> Scene:
        """Clear the scene and rebuild every primitive from scratch."""
        start = time.perf_counter()
        scene.clear()
        self._apply_root(scene, options, state)

        for spec in self.registry.all():
            if not spec.mounted_for(options, state):
                continue
            node = spec.shape(options)
            mounted = scene.mount(MountedPrimitive(id=spec.id, node=node, classes=list(spec.classes)))
            _apply_style(mounted.node, spec.style(options))

        self.apply_state(scene, options, state)

        elapsed = (time.perf_counter() - start) * 1000
        logger.debug(
            "Rendered %d primitives (%d visible) in %.1fms",
            len(scene.primitives),
            len(scene.visible_ids),
            elapsed,
        )
        return scene

    def update_styles(self, scene: Scene, options: OptionSet, state: Any) -> Scene:
        """Re-apply style recipes to mounted primitives without touching geometry."""
        self._apply_root(scene, options, state)
        for mounted in scene.primitives:
            spec = self.registry.get(mounted.id)
            _apply_style(mounted.node, spec.style(options))
        self.apply_state(scene, options, state)
        return scene

    def apply_state(self, scene: Scene, options: OptionSet, state: Any) -> None:
        """Flag mounted primitives visible/hidden from the state table."""
        visible = self.states.visible_ids(state)
        self.registry.check_ids(visible)
        for mounted in scene.primitives:
            mounted.visible = mounted.id in visible
            classes = [*mounted.classes, "on" if mounted.visible else "off"]
            mounted.node.attrs["class"] = " ".join(classes)
            mounted.node.update(self.hooks.visibility_attributes(options, mounted.id, mounted.visible))
        scene.root_classes[:] = self.hooks.root_classes(options, state)

    def _apply_root(self, scene: Scene, options: OptionSet, state: Any) -> None:
        scene.width, scene.height = self.hooks.root_size(options)
        scene.viewbox = self.hooks.viewbox
        scene.defs[:] = self.hooks.build_defs(options)


def _apply_style(node: Node, style: dict[str, dict[str, Any]]) -> None:
    if not style:
        return
    for n in node.walk():
        attrs = style.get(n.role)
        if attrs:
            n.update(attrs)
