"""Flat d6 face: rounded body plus pips (or a numeral) for values 1-6."""

from __future__ import annotations

from typing import Any

from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet
from pieceworks.engine.registry import PrimitiveRegistry, PrimitiveSpec, display_type
from pieceworks.engine.scene import el
from pieceworks.engine.states import table

# Pip offsets on a unit face, y pointing up
PIP_OFFSETS = {
    "pip-tl": (-0.3, 0.3),
    "pip-tr": (0.3, 0.3),
    "pip-ml": (-0.3, 0.0),
    "pip-c": (0.0, 0.0),
    "pip-mr": (0.3, 0.0),
    "pip-bl": (-0.3, -0.3),
    "pip-br": (0.3, -0.3),
}

FACE_PIPS: dict[str, tuple[str, ...]] = {
    "1": ("pip-c",),
    "2": ("pip-bl", "pip-tr"),
    "3": ("pip-bl", "pip-c", "pip-tr"),
    "4": ("pip-bl", "pip-tl", "pip-br", "pip-tr"),
    "5": ("pip-bl", "pip-tl", "pip-c", "pip-br", "pip-tr"),
    "6": ("pip-bl", "pip-ml", "pip-tl", "pip-br", "pip-mr", "pip-tr"),
}

PIP_STYLES = ("dots", "numbers")
# Pip diameter as a share of the face
PIP_SIZE = 0.12


def pip_center(pip_id: str) -> tuple[float, float]:
    x, y = PIP_OFFSETS[pip_id]
    return round(50 + x * 100, 3), round(50 - y * 100, 3)


def _uses_numbers(o: OptionSet) -> bool:
    return o["pipStyle"] == "numbers"


def _pip(pip_id: str) -> PrimitiveSpec:
    cx, cy = pip_center(pip_id)
    return PrimitiveSpec(
        id=pip_id,
        shape=lambda o: el("circle", cx=cx, cy=cy, r=PIP_SIZE * 100 / 2),
        style=lambda o: {"": {"fill": o["pipColor"]}},
        when=lambda o, value: not _uses_numbers(o),
        classes=("pip",),
    )


def _numeral(value: str) -> PrimitiveSpec:
    return PrimitiveSpec(
        id=f"numeral-{value}",
        shape=lambda o: el(
            "text",
            text=value,
            x=50,
            y=52,
            text_anchor="middle",
            dominant_baseline="central",
            font_family="Arial, sans-serif",
            font_weight="bold",
            font_size=48,
        ),
        style=lambda o: {"": {"fill": o["pipColor"]}},
        when=lambda o, current: _uses_numbers(o),
        classes=("numeral",),
    )


@display_type(kind="die-face", name="Dice Generator", tags={"dice"})
class DieFace(Display):
    display_type_name = "die-face"
    DEFAULTS = {
        "faceColor": "#ffffff",
        "pipColor": "#000000",
        "pipStyle": "dots",
        "borderColor": "#cccccc",
        "borderWidth": 2,
        "roundness": 10,
        "size": 50,
    }
    VIEWBOX = (0, 0, 100, 100)
    STATE_TABLE = table(
        "value",
        {value: (*pips, f"numeral-{value}") for value, pips in FACE_PIPS.items()},
        default="1",
        fallback="1",
        always=("body",),
        parse=str,
    )
    STRUCTURAL_OPTIONS = frozenset({"pipStyle"})

    @classmethod
    def build_registry(cls) -> PrimitiveRegistry:
        registry = PrimitiveRegistry()
        registry.register(
            PrimitiveSpec(
                id="body",
                shape=lambda o: el("rect", x=2, y=2, width=96, height=96),
                style=lambda o: {
                    "": {
                        "fill": o["faceColor"],
                        "stroke": o["borderColor"],
                        "stroke-width": o["borderWidth"],
                        # roundness is a percentage of the half side
                        "rx": o["roundness"] / 100 * 48,
                        "ry": o["roundness"] / 100 * 48,
                    }
                },
                classes=("die-body",),
            )
        )
        for pip_id in PIP_OFFSETS:
            registry.register(_pip(pip_id))
        for value in FACE_PIPS:
            registry.register(_numeral(value))
        return registry

    def root_classes(self, options: OptionSet, state: Any) -> list[str]:
        return ["die-face", f"value-{state}", f"pips-{options['pipStyle']}"]

    def stylesheet(self, options: OptionSet) -> dict[str, dict[str, Any]]:
        return {
            ".die-body": {"fill": options["faceColor"], "stroke": options["borderColor"]},
            ".pip, .numeral": {"fill": options["pipColor"]},
            ".off": {"display": "none"},
        }

    # --- Convenience ---

    def set_value(self, value: Any) -> DieFace:
        self.set_state(value)
        return self

    @property
    def value(self) -> int:
        return int(self.state)
