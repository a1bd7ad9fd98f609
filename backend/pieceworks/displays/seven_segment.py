"""Seven-segment LED digit.

Segments follow the usual labelling:

     aaa
    f   b
     ggg
    e   c
     ddd
"""

from __future__ import annotations

from typing import Any

from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet
from pieceworks.engine.registry import PrimitiveRegistry, PrimitiveSpec, display_type
from pieceworks.engine.scene import Node, el
from pieceworks.engine.states import table

SEGMENT_PATHS = {
    "a": "M8,5 L42,5 L42,15 L8,15 Z",
    "b": "M42,8 L42,45 L32,45 L32,8 Z",
    "c": "M42,55 L42,92 L32,92 L32,55 Z",
    "d": "M8,85 L42,85 L42,95 L8,95 Z",
    "e": "M8,55 L8,92 L18,92 L18,55 Z",
    "f": "M8,8 L8,45 L18,45 L18,8 Z",
    "g": "M8,45 L42,45 L42,55 L8,55 Z",
}

DIGIT_PATTERNS = {
    "": "",
    "0": "abcdef",
    "1": "bc",
    "2": "abged",
    "3": "abgcd",
    "4": "fgbc",
    "5": "afgcd",
    "6": "afgecd",
    "7": "abc",
    "8": "abcdefg",
    "9": "abfgcd",
}


def _segment(segment_id: str) -> PrimitiveSpec:
    return PrimitiveSpec(
        id=segment_id,
        shape=lambda o: el("path", d=SEGMENT_PATHS[segment_id]),
        style=lambda o: {"": {"fill": o["foregroundColor"]}},
        classes=("segment", segment_id),
        description=f"segment {segment_id}",
    )


@display_type(kind="seven-segment", name="7-Segment LED Display Generator", tags={"digit"})
class SevenSegmentDisplay(Display):
    display_type_name = "7-segment"
    DEFAULTS = {
        "backgroundColor": "#000000",
        "foregroundColor": "#ff0000",
        "opacityOffSegment": 0.15,
        "width": 50,
        "height": 100,
        "glowEnabled": True,
        "edgeRadius": 0,
    }
    VIEWBOX = (0, 0, 50, 100)
    SIZE_KEYS = ("width", "height")
    STATE_TABLE = table(
        "digit",
        DIGIT_PATTERNS,
        default="8",
        fallback="",
        always=("background",),
        parse=str,
        labels={"": "blank"},
    )
    STRUCTURAL_OPTIONS = frozenset({"edgeRadius"})

    @classmethod
    def build_registry(cls) -> PrimitiveRegistry:
        registry = PrimitiveRegistry()
        registry.register(
            PrimitiveSpec(
                id="background",
                shape=lambda o: el("rect", x=0, y=0, width=50, height=100, rx=o["edgeRadius"], ry=o["edgeRadius"]),
                style=lambda o: {"": {"fill": o["backgroundColor"]}},
                classes=("background",),
            )
        )
        for segment_id in "abcdefg":
            registry.register(_segment(segment_id))
        return registry

    def build_defs(self, options: OptionSet) -> list[Node]:
        return [
            el(
                "filter",
                id="glow",
                x="-30%",
                y="-30%",
                width="160%",
                height="160%",
                children=[
                    el("feGaussianBlur", stdDeviation=2, result="blur"),
                    el("feComposite", in_="SourceGraphic", in2="blur", operator="over"),
                ],
            )
        ]

    def root_classes(self, options: OptionSet, state: Any) -> list[str]:
        classes = [f"digit-{state}" if state != "" else "digit-blank"]
        if options["glowEnabled"]:
            classes.append("glow-enabled")
        return classes

    def visibility_attributes(self, options: OptionSet, primitive_id: str, visible: bool) -> dict[str, Any]:
        # Unlit segments stay drawn, dimmed
        if primitive_id == "background":
            return {}
        if visible:
            return {"opacity": 1, "filter": "url(#glow)" if options["glowEnabled"] else None}
        return {"opacity": options["opacityOffSegment"], "filter": None}

    def stylesheet(self, options: OptionSet) -> dict[str, dict[str, Any]]:
        lit: dict[str, Any] = {"opacity": 1}
        if options["glowEnabled"]:
            lit["filter"] = "url(#glow)"
        return {
            ".background": {"fill": options["backgroundColor"]},
            ".segment": {"fill": options["foregroundColor"]},
            ".segment.off": {"opacity": options["opacityOffSegment"]},
            ".segment.on": lit,
        }

    # --- Convenience ---

    def set_digit(self, digit: Any) -> None:
        self.set_state(digit)

    @property
    def digit(self) -> str:
        return self.state

    def set_glow(self, enabled: bool) -> None:
        self.set_option("glowEnabled", enabled)
