"""Chess piece: six piece types, three drawing styles, 3D gradient, glow or shadow."""

from __future__ import annotations

import logging
from typing import Any

from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet
from pieceworks.engine.registry import PrimitiveRegistry, PrimitiveSpec, display_type
from pieceworks.engine.scene import Node, el
from pieceworks.engine.states import table
from pieceworks.utils.colors import darken, lighten

logger = logging.getLogger(__name__)

PIECE_TYPES = ("pawn", "rook", "knight", "bishop", "queen", "king")
DRAWING_STYLES = ("classic", "modern", "minimalist")

# Same outlines for both colors; (path, filled)
PIECE_PATHS: dict[str, list[tuple[str, bool]]] = {
    "pawn": [
        (
            "M50,25 C42,25 35,32 35,40 C35,45 38,49 42,52 C38,54 35,58 35,63 L35,75 L65,75 L65,63 "
            "C65,58 62,54 58,52 C62,49 65,45 65,40 C65,32 58,25 50,25 Z",
            True,
        ),
    ],
    "rook": [
        (
            "M35,25 L35,35 L40,35 L40,30 L45,30 L45,35 L55,35 L55,30 L60,30 L60,35 L65,35 L65,25 L35,25 Z "
            "M35,40 L35,75 L65,75 L65,40 L35,40 Z",
            True,
        ),
    ],
    "knight": [
        (
            "M35,75 L65,75 L65,60 C65,55 60,50 55,50 L60,35 C60,30 55,25 50,25 C45,25 40,30 40,35 "
            "L40,40 C40,45 35,50 30,50 L35,75 Z",
            True,
        ),
        ("M45,35 C45,35 50,30 55,35 C60,40 55,45 55,45", False),
        ("M40,40 C40,40 45,35 50,40", False),
    ],
    "bishop": [
        (
            "M50,25 C45,25 40,30 40,35 C40,40 45,45 50,45 C55,45 60,40 60,35 C60,30 55,25 50,25 Z "
            "M45,50 L40,75 L60,75 L55,50 C55,50 52,55 50,55 C48,55 45,50 45,50 Z",
            True,
        ),
        ("M50,30 L50,35 M45,40 L55,40", False),
    ],
    "queen": [
        (
            "M50,25 C47,25 45,27 45,30 C45,33 47,35 50,35 C53,35 55,33 55,30 C55,27 53,25 50,25 Z "
            "M35,40 L40,75 L60,75 L65,40 L35,40 Z M35,40 C35,40 40,50 50,50 C60,50 65,40 65,40 Z",
            True,
        ),
        ("M40,45 L40,55 M50,45 L50,55 M60,45 L60,55", False),
    ],
    "king": [
        (
            "M50,20 L50,30 M45,25 L55,25 M40,75 L60,75 L60,45 C60,45 65,40 60,35 C55,30 50,35 50,35 "
            "C50,35 45,30 40,35 C35,40 40,45 40,45 L40,75 Z",
            True,
        ),
        ("M45,55 L55,55 M45,65 L55,65", False),
    ],
}

COLOR_PRESETS = {
    "white": {"pieceColorValue": "#FFFFFF", "borderColorValue": "#CCCCCC"},
    "black": {"pieceColorValue": "#000000", "borderColorValue": "#333333"},
}


def primitive_ids(piece_type: str) -> list[str]:
    paths = PIECE_PATHS[piece_type]
    return [f"{piece_type}-body" if filled else f"{piece_type}-detail-{i}" for i, (_, filled) in enumerate(paths)]


def _style_attrs(o: OptionSet) -> dict[str, Any]:
    style = o["style"] if o["style"] in DRAWING_STYLES else "classic"
    rounded = style in ("modern", "minimalist")
    return {
        "stroke-linejoin": "round" if rounded else None,
        "stroke-linecap": "round" if rounded else None,
        "fill-opacity": 0.9 if style == "minimalist" else None,
    }


def _filter(o: OptionSet) -> str | None:
    if o["glowEnabled"]:
        return "url(#glow)"
    if o["shadowEnabled"]:
        return "url(#shadow)"
    return None


def _path_spec(piece_type: str, primitive_id: str, d: str, filled: bool) -> PrimitiveSpec:
    def style(o: OptionSet) -> dict[str, dict[str, Any]]:
        if not filled:
            fill = "none"
        elif o["is3D"]:
            fill = f"url(#gradient-{primitive_id})"
        else:
            fill = o["pieceColorValue"]
        return {
            "": {
                "fill": fill,
                "stroke": o["borderColorValue"],
                "stroke-width": o["borderWidth"],
                "filter": _filter(o),
                **_style_attrs(o),
            }
        }

    return PrimitiveSpec(
        id=primitive_id,
        shape=lambda o: el("path", d=d),
        style=style,
        when=lambda o, current: current == piece_type,
        classes=("piece-path", "piece-body" if filled else "piece-detail"),
        description=f"{piece_type} {'body' if filled else 'detail'}",
    )


def _merge(*inputs: str) -> Node:
    return el("feMerge", children=[el("feMergeNode", in_=name) for name in inputs])


@display_type(kind="chess-piece", name="Chess Piece Generator", tags={"piece", "chess"})
class ChessPiece(Display):
    display_type_name = "chess-piece"
    DEFAULTS = {
        "pieceType": "pawn",
        "pieceColor": "white",
        "pieceColorValue": "#FFFFFF",
        "borderColorValue": "#CCCCCC",
        "size": 80,
        "borderWidth": 3,
        "is3D": True,
        "style": "classic",
        "glowEnabled": False,
        "glowColor": "#4A90E2",
        "glowSize": 5,
        "shadowEnabled": False,
        "shadowColor": "rgba(0, 0, 0, 0.5)",
        "shadowBlur": 5,
    }
    VIEWBOX = (0, 0, 100, 100)
    STATE_TABLE = table(
        "pieceType",
        {piece_type: primitive_ids(piece_type) for piece_type in PIECE_TYPES},
        default="pawn",
        fallback="pawn",
    )
    STRUCTURAL_OPTIONS = frozenset({"is3D", "style"})
    CHOICE_OPTIONS = {"style": DRAWING_STYLES}
    STATE_IS_STRUCTURAL = True

    @classmethod
    def build_registry(cls) -> PrimitiveRegistry:
        registry = PrimitiveRegistry()
        for piece_type in PIECE_TYPES:
            ids = primitive_ids(piece_type)
            for primitive_id, (d, filled) in zip(ids, PIECE_PATHS[piece_type]):
                registry.register(_path_spec(piece_type, primitive_id, d, filled))
        return registry

    def build_defs(self, options: OptionSet) -> list[Node]:
        defs: list[Node] = []
        if options["glowEnabled"]:
            defs.append(
                el(
                    "filter",
                    id="glow",
                    x="-50%",
                    y="-50%",
                    width="200%",
                    height="200%",
                    children=[
                        el("feGaussianBlur", stdDeviation=options["glowSize"], result="blur"),
                        el("feFlood", flood_color=options["glowColor"], result="color"),
                        el("feComposite", in_="color", in2="blur", operator="in", result="glow"),
                        _merge("glow", "SourceGraphic"),
                    ],
                )
            )
        if options["shadowEnabled"]:
            blur = options["shadowBlur"]
            defs.append(
                el(
                    "filter",
                    id="shadow",
                    x="-50%",
                    y="-50%",
                    width="200%",
                    height="200%",
                    children=[
                        el("feGaussianBlur", stdDeviation=blur, result="blur"),
                        el("feOffset", in_="blur", dx=0, dy=blur / 2, result="offsetBlur"),
                        el("feFlood", flood_color=options["shadowColor"], result="color"),
                        el("feComposite", in_="color", in2="offsetBlur", operator="in", result="shadow"),
                        _merge("shadow", "SourceGraphic"),
                    ],
                )
            )
        if options["is3D"]:
            piece_type = self.STATE_TABLE.normalize(options["pieceType"])
            base = options["pieceColorValue"]
            for primitive_id, (_, filled) in zip(primitive_ids(piece_type), PIECE_PATHS[piece_type]):
                if not filled:
                    continue
                defs.append(
                    el(
                        "linearGradient",
                        id=f"gradient-{primitive_id}",
                        x1="0%",
                        y1="0%",
                        x2="0%",
                        y2="100%",
                        children=[
                            el("stop", offset="0%", stop_color=lighten(base, 30)),
                            el("stop", offset="100%", stop_color=darken(base, 20)),
                        ],
                    )
                )
        return defs

    def root_classes(self, options: OptionSet, state: Any) -> list[str]:
        return ["chess-piece", str(options["pieceColor"]), state]

    def stylesheet(self, options: OptionSet) -> dict[str, dict[str, Any]]:
        return {
            ".piece-path": {"stroke": options["borderColorValue"], "stroke-width": options["borderWidth"]},
            ".piece-detail": {"fill": "none"},
        }

    # --- Convenience ---

    def set_piece_type(self, piece_type: str) -> ChessPiece:
        self.set_state(piece_type)
        return self

    def set_color(self, color: str) -> ChessPiece:
        """Switch between the white and black presets."""
        preset = COLOR_PRESETS.get(color)
        if preset is None:
            logger.warning("Unknown piece color %r, keeping %r", color, self.options["pieceColor"])
            return self
        self.set_options({"pieceColor": color, **preset})
        return self

    @property
    def label(self) -> str:
        return f"{self.options['pieceColor']} {self.state}"
