"""Checker piece with optional crown (classic, star or symbol) and glow."""

from __future__ import annotations

from typing import Any

from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet
from pieceworks.engine.registry import PrimitiveRegistry, PrimitiveSpec, display_type
from pieceworks.engine.scene import Node, el
from pieceworks.engine.states import parse_bool, table


CROWN_STYLES = ("classic", "star", "symbol")
BODY_IDS = ("piece-circle", "piece-border", "piece-highlight")
CROWN_IDS = tuple(f"crown-{style}" for style in CROWN_STYLES)


def crown_style(options: OptionSet) -> str:
    # Unknown styles are reported once, when the option is set
    style = options["crownStyle"]
    return style if style in CROWN_STYLES else "classic"


def _crown_when(style: str):
    return lambda o, crowned: bool(crowned) and crown_style(o) == style


def _crown_style(o: OptionSet) -> dict[str, dict[str, Any]]:
    return {"": {"fill": o["crownColor"], "stroke": o["crownBorderColor"]}}


def _circle(**attrs: Any) -> Node:
    return el("circle", cx=50, cy=50, r=45, **attrs)


@display_type(kind="checker-piece", name="Checker Piece Generator", tags={"piece", "checkers"})
class CheckerPiece(Display):
    display_type_name = "checker-piece"
    DEFAULTS = {
        "pieceColor": "#e74c3c",
        "borderColor": "#c0392b",
        "crownColor": "#f1c40f",
        "crownBorderColor": "#d4ac0d",
        "size": 80,
        "borderWidth": 3,
        "is3D": True,
        "isCrowned": False,
        "crownStyle": "classic",
        "glowEnabled": False,
        "glowColor": "rgba(255, 255, 255, 0.7)",
        "glowSize": 10,
    }
    VIEWBOX = (0, 0, 100, 100)
    STATE_TABLE = table(
        "isCrowned",
        {False: BODY_IDS, True: BODY_IDS + CROWN_IDS},
        default=False,
        fallback=False,
        parse=parse_bool,
        labels={False: "regular", True: "king"},
    )
    STRUCTURAL_OPTIONS = frozenset({"is3D", "crownStyle"})
    CHOICE_OPTIONS = {"crownStyle": CROWN_STYLES}
    STATE_IS_STRUCTURAL = True

    @classmethod
    def build_registry(cls) -> PrimitiveRegistry:
        registry = PrimitiveRegistry()
        registry.register(
            PrimitiveSpec(
                id="piece-circle",
                shape=lambda o: _circle(),
                style=lambda o: {"": {"fill": o["pieceColor"], "filter": "url(#glow)" if o["glowEnabled"] else None}},
                classes=("piece-circle",),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="piece-border",
                shape=lambda o: _circle(fill="none"),
                style=lambda o: {"": {"stroke": o["borderColor"], "stroke-width": o["borderWidth"]}},
                classes=("piece-border",),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="piece-highlight",
                shape=lambda o: _circle(fill="url(#piece-gradient)"),
                when=lambda o, crowned: bool(o["is3D"]),
                classes=("piece-highlight",),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="crown-classic",
                shape=lambda o: el("path", d="M30,60 L35,40 L45,50 L50,35 L55,50 L65,40 L70,60 Z", stroke_width=1.5),
                style=_crown_style,
                when=_crown_when("classic"),
                classes=("piece-crown", "crown-classic"),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="crown-star",
                shape=lambda o: el(
                    "polygon",
                    points="50,30 61,55 90,55 65,70 75,100 50,80 25,100 35,70 10,55 39,55",
                    stroke_width=1.5,
                    transform="scale(0.5) translate(50, 30)",
                ),
                style=_crown_style,
                when=_crown_when("star"),
                classes=("piece-crown", "crown-star"),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="crown-symbol",
                shape=lambda o: el(
                    "text",
                    text="K",
                    x=50,
                    y=60,
                    text_anchor="middle",
                    dominant_baseline="middle",
                    font_family="Arial, sans-serif",
                    font_weight="bold",
                    font_size=30,
                    stroke_width=0.5,
                ),
                style=_crown_style,
                when=_crown_when("symbol"),
                classes=("piece-crown", "crown-symbol"),
            )
        )
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
                    el("feGaussianBlur", stdDeviation=options["glowSize"] / 2, result="blur"),
                    el("feFlood", flood_color=options["glowColor"], result="glowColor"),
                    el("feComposite", in_="glowColor", in2="blur", operator="in", result="glow"),
                    el("feComposite", in_="SourceGraphic", in2="glow", operator="over"),
                ],
            ),
            el(
                "linearGradient",
                id="piece-gradient",
                x1="0%",
                y1="0%",
                x2="0%",
                y2="100%",
                children=[
                    el("stop", offset="0%", stop_color="rgba(255,255,255,0.3)", stop_opacity=1),
                    el("stop", offset="100%", stop_color="rgba(0,0,0,0.2)", stop_opacity=1),
                ],
            ),
        ]

    def root_classes(self, options: OptionSet, state: Any) -> list[str]:
        classes = ["checker-piece"]
        if state:
            classes.append("crowned")
        if options["glowEnabled"]:
            classes.append("glow-enabled")
        return classes

    def stylesheet(self, options: OptionSet) -> dict[str, dict[str, Any]]:
        circle: dict[str, Any] = {"fill": options["pieceColor"]}
        if options["glowEnabled"]:
            circle["filter"] = "url(#glow)"
        return {
            ".piece-circle": circle,
            ".piece-border": {"stroke": options["borderColor"], "stroke-width": options["borderWidth"]},
            ".piece-crown": {"fill": options["crownColor"], "stroke": options["crownBorderColor"]},
        }

    # --- Convenience ---

    def set_crowned(self, crowned: bool) -> CheckerPiece:
        self.set_state(crowned)
        return self

    @property
    def crowned(self) -> bool:
        return self.state

    def set_glow(self, enabled: bool) -> CheckerPiece:
        self.set_option("glowEnabled", enabled)
        return self
