"""Board compositions — a grid of squares holding independent piece displays.

Every piece is its own Display on its own Surface; the board only tracks
where each one sits and composes them into a single document on export.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from pieceworks.displays.checker_piece import CheckerPiece
from pieceworks.displays.chess_piece import COLOR_PRESETS, PIECE_TYPES, ChessPiece
from pieceworks.engine.display import Display
from pieceworks.engine.options import OptionSet, create_options
from pieceworks.engine.scene import Node, Surface, el, format_value

logger = logging.getLogger(__name__)

_URL_REF_RE = re.compile(r"url\(#([^)]+)\)")

BACK_RANK = ("rook", "knight", "bishop", "queen", "king", "bishop", "knight", "rook")


@dataclass
class PlacedPiece:
    piece: Display
    row: int
    col: int
    side: str


def prefix_ids(nodes: list[Node], prefix: str) -> list[Node]:
    """Clone ``nodes`` with every id and ``url(#id)`` reference prefixed."""
    cloned = [n.clone() for n in nodes]
    for root in cloned:
        for node in root.walk():
            if "id" in node.attrs:
                node.attrs["id"] = prefix + node.attrs["id"]
            for name, value in node.attrs.items():
                if "url(#" in value:
                    node.attrs[name] = _URL_REF_RE.sub(lambda m: f"url(#{prefix}{m.group(1)})", value)
    return cloned


class Board:
    """Square grid with pieces; subclasses choose the piece display and sides."""

    DEFAULTS: ClassVar[dict[str, Any]] = {}
    SIDES: ClassVar[tuple[str, ...]] = ()
    kind: ClassVar[str] = ""

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        self.options: OptionSet = create_options(options, self.DEFAULTS)
        self.pieces: list[PlacedPiece] = []

    # --- Geometry ---

    @property
    def board_size(self) -> int:
        return int(self.options["boardSize"])

    @property
    def pixel_size(self) -> float:
        return self.board_size * self.options["squareSize"]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.board_size and 0 <= col < self.board_size

    @staticmethod
    def is_light(row: int, col: int) -> bool:
        return (row + col) % 2 == 0

    def square_color(self, row: int, col: int) -> str:
        return self.options["lightSquareColor"] if self.is_light(row, col) else self.options["darkSquareColor"]

    # --- Pieces ---

    def piece_at(self, row: int, col: int) -> PlacedPiece | None:
        for placed in self.pieces:
            if placed.row == row and placed.col == col:
                return placed
        return None

    def _place(self, piece: Display, row: int, col: int, side: str) -> Display:
        if self.piece_at(row, col) is not None:
            self.remove_piece(row, col)
        self.pieces.append(PlacedPiece(piece=piece, row=row, col=col, side=side))
        return piece

    def remove_piece(self, row: int, col: int) -> bool:
        placed = self.piece_at(row, col)
        if placed is None:
            return False
        self.pieces.remove(placed)
        return True

    def clear_board(self) -> bool:
        self.pieces = []
        return True

    def count(self, side: str | None = None) -> int:
        return sum(1 for p in self.pieces if side is None or p.side == side)

    def update_board_colors(self, light_color: str, dark_color: str) -> bool:
        self.options["lightSquareColor"] = light_color
        self.options["darkSquareColor"] = dark_color
        return True

    # --- Export ---

    def _square_nodes(self) -> list[Node]:
        size = self.options["squareSize"]
        return [
            el(
                "rect",
                class_="light-square" if self.is_light(row, col) else "dark-square",
                x=col * size,
                y=row * size,
                width=size,
                height=size,
                fill=self.square_color(row, col),
            )
            for row in range(self.board_size)
            for col in range(self.board_size)
        ]

    def _piece_group(self, index: int, placed: PlacedPiece) -> tuple[list[Node], Node]:
        piece = placed.piece
        square = self.options["squareSize"]
        piece_w, piece_h = piece.size
        _, _, vb_w, vb_h = piece.viewbox
        x = placed.col * square + (square - piece_w) / 2
        y = placed.row * square + (square - piece_h) / 2
        prefix = f"p{index}-"

        scene = piece.scene
        defs = prefix_ids(scene.defs, prefix)
        body = prefix_ids([p.node for p in scene.primitives if p.visible], prefix)
        group = el(
            "g",
            class_=f"piece {placed.side}",
            transform=f"translate({format_value(float(x))}, {format_value(float(y))}) "
            f"scale({format_value(piece_w / vb_w)}, {format_value(piece_h / vb_h)})",
            children=body,
        )
        return defs, group

    def export_vector(self) -> str:
        from pieceworks.svg.serializer import serialize_document

        defs: list[Node] = []
        body = self._square_nodes()
        for index, placed in enumerate(self.pieces):
            piece_defs, group = self._piece_group(index, placed)
            defs.extend(piece_defs)
            body.append(group)

        size = format_value(float(self.pixel_size))
        svg = serialize_document(
            {"width": size, "height": size, "viewBox": f"0 0 {size} {size}", "class": self.kind},
            body,
            defs=defs,
            settings=self.options.to_dict(),
        )
        logger.info("Exported %s with %d pieces, %d bytes", self.kind, len(self.pieces), len(svg))
        return svg

    async def export_raster(self, scale: float = 1, format: str = "png", timeout: float | None = None, cancel: Any = None) -> str:
        from pieceworks.export.raster import rasterize

        px = round(self.pixel_size * scale)
        return await rasterize(self.export_vector(), width=px, height=px, format=format, timeout=timeout, cancel=cancel)


class CheckerBoard(Board):
    kind = "checker-board"
    SIDES = ("red", "black")
    DEFAULTS = {
        "boardSize": 8,
        "lightSquareColor": "#f5deb3",
        "darkSquareColor": "#8b4513",
        "redPieceColor": "#e74c3c",
        "redPieceBorderColor": "#c0392b",
        "blackPieceColor": "#2c3e50",
        "blackPieceBorderColor": "#1a2530",
        "squareSize": 90,
        "pieceSize": 80,
        "borderWidth": 3,
        "is3D": True,
    }

    def _piece_options(self, side: str, crowned: bool) -> dict[str, Any]:
        return {
            "pieceColor": self.options[f"{side}PieceColor"],
            "borderColor": self.options[f"{side}PieceBorderColor"],
            "size": self.options["pieceSize"],
            "borderWidth": self.options["borderWidth"],
            "is3D": self.options["is3D"],
            "isCrowned": crowned,
        }

    def add_piece(self, side: str, row: int, col: int, crowned: bool = False) -> CheckerPiece | None:
        if side not in self.SIDES:
            raise ValueError(f"Unknown checker side: {side}")
        if not self.in_bounds(row, col):
            logger.warning("Square (%d, %d) is off the board", row, col)
            return None
        piece = CheckerPiece(Surface(f"{side}@{row},{col}"), self._piece_options(side, crowned))
        self._place(piece, row, col, side)
        return piece

    def move_piece(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """Move a piece, crowning it when it reaches the far row."""
        placed = self.piece_at(from_row, from_col)
        if placed is None or not self.in_bounds(to_row, to_col):
            return False
        crowned = placed.piece.state
        self.remove_piece(from_row, from_col)
        piece = self.add_piece(placed.side, to_row, to_col, crowned)
        if not crowned and piece is not None:
            far_row = 0 if placed.side == "red" else self.board_size - 1
            if to_row == far_row:
                piece.set_crowned(True)
        return True

    def setup_initial_position(self) -> None:
        self.clear_board()
        n = self.board_size
        for row in range(3):
            for col in range(n):
                if (row + col) % 2 == 1:
                    self.add_piece("black", row, col)
        for row in range(n - 3, n):
            for col in range(n):
                if (row + col) % 2 == 1:
                    self.add_piece("red", row, col)

    def update_piece_colors(self, red_color: str, red_border: str, black_color: str, black_border: str) -> bool:
        self.options.merge(
            {
                "redPieceColor": red_color,
                "redPieceBorderColor": red_border,
                "blackPieceColor": black_color,
                "blackPieceBorderColor": black_border,
            }
        )
        for placed in self.pieces:
            placed.piece.set_options(
                {
                    "pieceColor": self.options[f"{placed.side}PieceColor"],
                    "borderColor": self.options[f"{placed.side}PieceBorderColor"],
                }
            )
        return True


class ChessBoard(Board):
    kind = "chess-board"
    SIDES = ("white", "black")
    DEFAULTS = {
        "boardSize": 8,
        "squareSize": 60,
        "lightSquareColor": "#F0D9B5",
        "darkSquareColor": "#B58863",
        "whitePieceColor": "#FFFFFF",
        "whitePieceBorder": "#CCCCCC",
        "blackPieceColor": "#000000",
        "blackPieceBorder": "#333333",
        "pieceSize": 50,
        "borderWidth": 2,
        "is3D": True,
        "style": "classic",
        "glowEnabled": False,
        "glowColor": "#4A90E2",
        "glowSize": 5,
        "shadowEnabled": True,
        "shadowColor": "rgba(0, 0, 0, 0.5)",
        "shadowBlur": 5,
    }

    def _piece_options(self, piece_type: str, color: str) -> dict[str, Any]:
        o = self.options
        return {
            "pieceType": piece_type,
            "pieceColor": color,
            "pieceColorValue": o[f"{color}PieceColor"],
            "borderColorValue": o[f"{color}PieceBorder"],
            "size": o["pieceSize"],
            "borderWidth": o["borderWidth"],
            "is3D": o["is3D"],
            "style": o["style"],
            "glowEnabled": o["glowEnabled"],
            "glowColor": o["glowColor"],
            "glowSize": o["glowSize"],
            "shadowEnabled": o["shadowEnabled"],
            "shadowColor": o["shadowColor"],
            "shadowBlur": o["shadowBlur"],
        }

    def square_label(self, row: int, col: int) -> str:
        """Algebraic name of a square; row 0 is the eighth rank."""
        return f"{chr(97 + col)}{self.board_size - row}"

    def add_piece(self, piece_type: str, color: str, row: int, col: int) -> ChessPiece | None:
        if color not in COLOR_PRESETS:
            raise ValueError(f"Unknown chess color: {color}")
        if piece_type not in PIECE_TYPES:
            raise ValueError(f"Unknown piece type: {piece_type}")
        if not self.in_bounds(row, col):
            logger.warning("Square (%d, %d) is off the board", row, col)
            return None
        piece = ChessPiece(
            Surface(f"{color} {piece_type}@{self.square_label(row, col)}"),
            self._piece_options(piece_type, color),
        )
        self._place(piece, row, col, color)
        return piece

    def move_piece(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        placed = self.piece_at(from_row, from_col)
        if placed is None or not self.in_bounds(to_row, to_col):
            return False
        self.remove_piece(from_row, from_col)
        self.add_piece(placed.piece.state, placed.side, to_row, to_col)
        return True

    def setup_initial_position(self) -> bool:
        self.clear_board()
        for col in range(self.board_size):
            self.add_piece("pawn", "white", 6, col)
            self.add_piece("pawn", "black", 1, col)
        for col in range(min(self.board_size, len(BACK_RANK))):
            self.add_piece(BACK_RANK[col], "white", 7, col)
            self.add_piece(BACK_RANK[col], "black", 0, col)
        logger.info("Set up initial position with %d pieces", len(self.pieces))
        return True

    def _update_pieces(self, values: Mapping[str, Any]) -> bool:
        self.options.merge(values)
        for placed in self.pieces:
            placed.piece.set_options(values)
        return True

    def update_piece_colors(
        self, white_color: str, white_border: str, black_color: str, black_border: str
    ) -> bool:
        self.options.merge(
            {
                "whitePieceColor": white_color,
                "whitePieceBorder": white_border,
                "blackPieceColor": black_color,
                "blackPieceBorder": black_border,
            }
        )
        for placed in self.pieces:
            placed.piece.set_options(
                {
                    "pieceColorValue": self.options[f"{placed.side}PieceColor"],
                    "borderColorValue": self.options[f"{placed.side}PieceBorder"],
                }
            )
        return True

    def update_piece_style(self, style: str) -> bool:
        return self._update_pieces({"style": style})

    def toggle_3d_effect(self, enabled: bool) -> bool:
        return self._update_pieces({"is3D": enabled})

    def toggle_glow_effect(self, enabled: bool) -> bool:
        return self._update_pieces({"glowEnabled": enabled})

    def toggle_shadow_effect(self, enabled: bool) -> bool:
        return self._update_pieces({"shadowEnabled": enabled})


BOARD_TYPES: dict[str, type[Board]] = {
    CheckerBoard.kind: CheckerBoard,
    ChessBoard.kind: ChessBoard,
}
