"""Minesweeper tile: raised/pressed/revealed faces, numbers, mine, flag and smileys."""

from __future__ import annotations

from typing import Any

from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet
from pieceworks.engine.registry import PrimitiveRegistry, PrimitiveSpec, display_type
from pieceworks.engine.scene import Node, el
from pieceworks.engine.states import table
from pieceworks.utils.colors import with_alpha

NUMBER_COLORS = ("#0000FF", "#008000", "#FF0000", "#000080", "#800000", "#008080", "#000000", "#808080")

_SMILEY_PARTS = {
    "smiley_normal": ("smiley-eyes", "smiley-smile"),
    "smiley_cool": ("smiley-sunglasses", "smiley-smile"),
    "smiley_sad": ("smiley-eyes", "smiley-frown"),
    "smiley_neutral": ("smiley-eyes", "smiley-flat"),
    "smiley_tense": ("smiley-eyes", "smiley-tense"),
}

TILE_STATES: dict[str, tuple[str, ...]] = {
    "unplayed": ("unplayed",),
    "pressed": ("pressed",),
    "flagged": ("unplayed", "flag"),
    "revealed_mine": ("revealed", "mine"),
    "wrong_guess": ("revealed", "wrong-guess"),
    "neighbor_0": ("revealed",),
    **{f"neighbor_{n}": ("revealed", f"number-{n}") for n in range(1, 9)},
    **{state: ("unplayed", "smiley-face", *parts) for state, parts in _SMILEY_PARTS.items()},
}


def _face(o: OptionSet, fill: str) -> Node:
    return el("rect", x=5, y=5, width=90, height=90, rx=0, ry=0, fill=fill, stroke=o["borderColor"], stroke_width=1)


def _unplayed_shape(o: OptionSet) -> Node:
    return el(
        "g",
        children=[
            el("rect", role="button", x=5, y=5, width=90, height=90, rx=0, ry=0, fill="url(#buttonGradient)", stroke_width=1),
            el("line", role="highlight", x1=7, y1=7, x2=93, y2=7, stroke_width=2),
            el("line", role="highlight", x1=7, y1=7, x2=7, y2=93, stroke_width=2),
            el("line", role="shadow", x1=7, y1=93, x2=93, y2=93, stroke_width=2),
            el("line", role="shadow", x1=93, y1=7, x2=93, y2=93, stroke_width=2),
        ],
    )


def _unplayed_style(o: OptionSet) -> dict[str, dict[str, Any]]:
    return {
        "": {"filter": "url(#innerShadow)" if o["innerShadowEnabled"] else None},
        "button": {"stroke": o["borderColor"]},
        "highlight": {"stroke": o["highlightColor"], "stroke-opacity": o["highlightOpacity"]},
        "shadow": {"stroke": o["shadowColor"], "stroke-opacity": o["shadowOpacity"]},
    }


def _flat_face_style(o: OptionSet, shadowed: bool) -> dict[str, dict[str, Any]]:
    style: dict[str, Any] = {"fill": o["revealedColor"], "stroke": o["borderColor"]}
    if shadowed:
        style["filter"] = "url(#innerShadow)" if o["innerShadowEnabled"] else None
    return {"": style}


def _number(n: int) -> PrimitiveSpec:
    return PrimitiveSpec(
        id=f"number-{n}",
        shape=lambda o: el(
            "text",
            text=str(n),
            x=50,
            y=53,
            font_family="'Courier New', monospace",
            font_size=55,
            font_weight="bold",
            text_anchor="middle",
            dominant_baseline="central",
            paint_order="stroke",
        ),
        style=lambda o: {
            "": {
                "fill": o[f"number{n}Color"],
                "stroke": o["numberOutlineColor"],
                "stroke-width": o["numberOutlineWidth"],
            }
        },
        classes=("number", f"number-{n}"),
    )


def _mine_shape(o: OptionSet) -> Node:
    spikes = [(50, 20, 50, 80), (20, 50, 80, 50), (29, 29, 71, 71), (29, 71, 71, 29)]
    return el(
        "g",
        children=[
            el("circle", role="body", cx=50, cy=50, r=20),
            *[el("line", role="spike", x1=a, y1=b, x2=c, y2=d, stroke_width=5) for a, b, c, d in spikes],
            el("circle", cx=43, cy=43, r=5, fill="#ffffff"),
        ],
    )


def _flag_shape(o: OptionSet) -> Node:
    return el(
        "g",
        children=[
            el("rect", role="pole", class_="flag-pole", x=45, y=25, width=4, height=45),
            el("polygon", role="cloth", class_="flag-cloth", points="49,25 49,40 65,32.5"),
            el("rect", role="pole", class_="flag-pole", x=37, y=70, width=20, height=5),
        ],
    )


def _wrong_guess_shape(o: OptionSet) -> Node:
    return el(
        "g",
        children=[
            el("line", x1=25, y1=25, x2=75, y2=75, stroke_width=8),
            el("line", x1=75, y1=25, x2=25, y2=75, stroke_width=8),
        ],
    )


def _feature(o: OptionSet) -> dict[str, dict[str, Any]]:
    return {"": {"stroke": o["smileyFeatureColor"]}, "fill": {"fill": o["smileyFeatureColor"]}}


def _smiley_specs() -> list[PrimitiveSpec]:
    mouth = dict(fill="none", stroke_width=3, stroke_linecap="round", stroke_linejoin="round")
    return [
        PrimitiveSpec(
            id="smiley-face",
            shape=lambda o: el("circle", cx=50, cy=50, r=30, stroke_width=2),
            style=lambda o: {"": {"fill": o["smileyColor"], "stroke": o["smileyFeatureColor"]}},
            classes=("smiley", "smiley-face"),
        ),
        PrimitiveSpec(
            id="smiley-eyes",
            shape=lambda o: el(
                "g",
                children=[el("circle", role="fill", cx=40, cy=42, r=3.5), el("circle", role="fill", cx=60, cy=42, r=3.5)],
            ),
            style=_feature,
            classes=("smiley", "smiley-eyes"),
        ),
        PrimitiveSpec(
            id="smiley-sunglasses",
            shape=lambda o: el(
                "g",
                children=[
                    el("rect", role="fill", x=31, y=37, width=16, height=9, rx=3),
                    el("rect", role="fill", x=53, y=37, width=16, height=9, rx=3),
                    el("line", x1=47, y1=40, x2=53, y2=40, stroke_width=2),
                    el("line", x1=31, y1=40, x2=22, y2=37, stroke_width=2),
                    el("line", x1=69, y1=40, x2=78, y2=37, stroke_width=2),
                ],
            ),
            style=_feature,
            classes=("smiley", "smiley-sunglasses"),
        ),
        PrimitiveSpec(
            id="smiley-smile",
            shape=lambda o: el("path", d="M38,58 Q50,70 62,58", **mouth),
            style=_feature,
            classes=("smiley", "smiley-mouth"),
        ),
        PrimitiveSpec(
            id="smiley-frown",
            shape=lambda o: el("path", d="M38,66 Q50,54 62,66", **mouth),
            style=_feature,
            classes=("smiley", "smiley-mouth"),
        ),
        PrimitiveSpec(
            id="smiley-flat",
            shape=lambda o: el("line", x1=38, y1=62, x2=62, y2=62, stroke_width=3, stroke_linecap="round"),
            style=_feature,
            classes=("smiley", "smiley-mouth"),
        ),
        PrimitiveSpec(
            id="smiley-tense",
            shape=lambda o: el("path", d="M36,62 L41,58 L46,62 L51,58 L56,62 L61,58 L64,61", **mouth),
            style=_feature,
            classes=("smiley", "smiley-mouth"),
        ),
    ]


@display_type(kind="minesweeper-tile", name="Minesweeper Tile Generator", tags={"tile"})
class MinesweeperTileDisplay(Display):
    display_type_name = "minesweeper-tile"
    DEFAULTS = {
        "unplayedColor": "#4a90e2",
        "revealedColor": "#C0C0C0",
        "borderColor": "#2c3e50",
        "highlightColor": "#ffffff",
        "shadowColor": "#2c3e50",
        "numberOutlineColor": "#ffffff",
        "numberOutlineWidth": 1,
        **{f"number{n}Color": color for n, color in enumerate(NUMBER_COLORS, start=1)},
        "mineColor": "#000000",
        "flagColor": "#FF0000",
        "wrongGuessColor": "#FF0000",
        "smileyColor": "#FFD700",
        "smileyFeatureColor": "#000000",
        "shadowOpacity": 0.8,
        "highlightOpacity": 0.7,
        "innerShadowEnabled": True,
        "innerShadowBlur": 1,
        "innerShadowOffset": 2,
        "tileSize": 150,
    }
    VIEWBOX = (0, 0, 100, 100)
    SIZE_KEYS = ("tileSize",)
    STATE_TABLE = table("tileState", TILE_STATES, default="unplayed", fallback="unplayed")

    @classmethod
    def build_registry(cls) -> PrimitiveRegistry:
        registry = PrimitiveRegistry()
        registry.register(
            PrimitiveSpec(id="unplayed", shape=_unplayed_shape, style=_unplayed_style, classes=("unplayed-tile",))
        )
        registry.register(
            PrimitiveSpec(
                id="pressed",
                shape=lambda o: _face(o, o["revealedColor"]),
                style=lambda o: _flat_face_style(o, shadowed=True),
                classes=("pressed-tile",),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="revealed",
                shape=lambda o: _face(o, o["revealedColor"]),
                style=lambda o: _flat_face_style(o, shadowed=False),
                classes=("revealed-tile",),
            )
        )
        for n in range(1, 9):
            registry.register(_number(n))
        registry.register(
            PrimitiveSpec(
                id="mine",
                shape=_mine_shape,
                style=lambda o: {"body": {"fill": o["mineColor"]}, "spike": {"stroke": o["mineColor"]}},
                classes=("mine",),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="flag",
                shape=_flag_shape,
                style=lambda o: {"pole": {"fill": o["borderColor"]}, "cloth": {"fill": o["flagColor"]}},
                classes=("flag",),
            )
        )
        registry.register(
            PrimitiveSpec(
                id="wrong-guess",
                shape=_wrong_guess_shape,
                style=lambda o: {"": {"stroke": o["wrongGuessColor"]}},
                classes=("wrong-guess",),
            )
        )
        for spec in _smiley_specs():
            registry.register(spec)
        return registry

    def build_defs(self, options: OptionSet) -> list[Node]:
        offset = options["innerShadowOffset"]
        return [
            el(
                "linearGradient",
                id="buttonGradient",
                x1="0%",
                y1="0%",
                x2="100%",
                y2="100%",
                children=[
                    el("stop", offset="0%", stop_color=options["unplayedColor"]),
                    el("stop", offset="100%", stop_color=with_alpha(options["unplayedColor"], "CC")),
                ],
            ),
            el(
                "filter",
                id="innerShadow",
                x="-20%",
                y="-20%",
                width="140%",
                height="140%",
                children=[
                    el("feGaussianBlur", in_="SourceAlpha", stdDeviation=options["innerShadowBlur"], result="blur"),
                    el("feOffset", dx=offset, dy=offset),
                    el(
                        "feComposite",
                        in_="SourceAlpha",
                        in2="offsetblur",
                        operator="arithmetic",
                        k1=1,
                        k2=0,
                        k3=0,
                        k4=0,
                        result="shadowDiff",
                    ),
                    el("feFlood", flood_color=options["shadowColor"], result="shadowColor"),
                    el("feComposite", in_="shadowColor", in2="shadowDiff", operator="in", result="shadow"),
                    el("feComposite", in_="shadow", in2="SourceGraphic", operator="over"),
                ],
            ),
        ]

    def root_classes(self, options: OptionSet, state: Any) -> list[str]:
        classes = [f"tile-{state.replace('_', '-')}"]
        if options["innerShadowEnabled"]:
            classes.append("inner-shadow-enabled")
        return classes

    def stylesheet(self, options: OptionSet) -> dict[str, dict[str, Any]]:
        return {
            ".off": {"display": "none"},
            ".revealed-tile, .pressed-tile": {"fill": options["revealedColor"]},
            ".inner-shadow-enabled .unplayed-tile, .inner-shadow-enabled .pressed-tile": {
                "filter": "url(#innerShadow)"
            },
        }

    # --- Convenience ---

    def set_inner_shadow(self, enabled: bool) -> None:
        self.set_option("innerShadowEnabled", enabled)

    @property
    def tile_state(self) -> str:
        return self.state
