"""Pieceworks display engine."""

from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet, create_options
from pieceworks.engine.registry import PrimitiveRegistry, PrimitiveSpec, display_type, get_display_registry
from pieceworks.engine.render import Renderer
from pieceworks.engine.scene import MountedPrimitive, Node, Scene, Surface, el
from pieceworks.engine.states import StateTable, table

__all__ = [
    "Display",
    "OptionSet",
    "create_options",
    "PrimitiveRegistry",
    "PrimitiveSpec",
    "display_type",
    "get_display_registry",
    "Renderer",
    "MountedPrimitive",
    "Node",
    "Scene",
    "Surface",
    "el",
    "StateTable",
    "table",
]
