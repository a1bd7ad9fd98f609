"""Tests for checker and chess board compositions."""

import xml.etree.ElementTree as ET

import pytest

from pieceworks.displays.boards import CheckerBoard, ChessBoard, prefix_ids
from pieceworks.engine.scene import el


def test_checker_initial_position():
    board = CheckerBoard()
    board.setup_initial_position()
    assert board.count("red") == 12
    assert board.count("black") == 12
    assert all(not board.is_light(p.row, p.col) for p in board.pieces)


def test_checker_add_outside_board():
    board = CheckerBoard()
    assert board.add_piece("red", 8, 0) is None
    assert board.count() == 0
    with pytest.raises(ValueError):
        board.add_piece("green", 0, 0)


def test_checker_add_replaces_occupant():
    board = CheckerBoard()
    board.add_piece("red", 3, 2)
    board.add_piece("black", 3, 2)
    assert board.count() == 1
    assert board.piece_at(3, 2).side == "black"


def test_checker_move_crowns_on_far_row():
    board = CheckerBoard()
    board.add_piece("red", 1, 0)
    board.add_piece("black", 6, 1)
    assert board.move_piece(1, 0, 0, 1)
    assert board.move_piece(6, 1, 7, 0)
    assert board.piece_at(0, 1).piece.crowned
    assert board.piece_at(7, 0).piece.crowned
    assert board.piece_at(1, 0) is None


def test_checker_move_from_empty_square():
    board = CheckerBoard()
    assert board.move_piece(4, 4, 3, 3) is False


def test_checker_piece_colors():
    board = CheckerBoard()
    piece = board.add_piece("black", 0, 1)
    board.update_piece_colors("#aa0000", "#550000", "#0000aa", "#000055")
    assert piece.options["pieceColor"] == "#0000aa"
    assert piece.scene.get("piece-circle").node.attrs["fill"] == "#0000aa"


def test_remove_and_clear():
    board = CheckerBoard()
    board.setup_initial_position()
    assert board.remove_piece(0, 1)
    assert not board.remove_piece(0, 1)
    assert board.count() == 23
    board.clear_board()
    assert board.count() == 0


def test_chess_initial_position():
    board = ChessBoard()
    board.setup_initial_position()
    assert board.count() == 32
    assert board.piece_at(7, 4).piece.state == "king"
    assert board.piece_at(0, 3).piece.state == "queen"
    assert board.piece_at(0, 3).side == "black"
    assert board.piece_at(6, 0).piece.state == "pawn"


def test_chess_square_labels():
    board = ChessBoard()
    assert board.square_label(0, 0) == "a8"
    assert board.square_label(7, 7) == "h1"
    assert board.square_label(6, 4) == "e2"


def test_chess_add_validation():
    board = ChessBoard()
    with pytest.raises(ValueError):
        board.add_piece("dragon", "white", 0, 0)
    with pytest.raises(ValueError):
        board.add_piece("pawn", "green", 0, 0)
    assert board.add_piece("pawn", "white", -1, 0) is None


def test_chess_move_keeps_type():
    board = ChessBoard()
    board.add_piece("knight", "white", 7, 1)
    assert board.move_piece(7, 1, 5, 2)
    moved = board.piece_at(5, 2)
    assert moved.piece.state == "knight"
    assert moved.side == "white"


def test_chess_style_toggles_reach_every_piece():
    board = ChessBoard()
    board.setup_initial_position()
    board.update_piece_style("modern")
    board.toggle_3d_effect(False)
    board.toggle_glow_effect(True)
    for placed in board.pieces:
        assert placed.piece.options["style"] == "modern"
        assert placed.piece.options["is3D"] is False
        assert placed.piece.options["glowEnabled"] is True
    assert board.options["style"] == "modern"


def test_chess_piece_colors():
    board = ChessBoard()
    white = board.add_piece("rook", "white", 7, 0)
    black = board.add_piece("rook", "black", 0, 0)
    board.update_piece_colors("#eeeeee", "#999999", "#111111", "#444444")
    assert white.options["pieceColorValue"] == "#eeeeee"
    assert black.options["borderColorValue"] == "#444444"


def test_prefix_ids_rewrites_references():
    node = el("g", children=[el("path", fill="url(#grad)"), el("linearGradient", id="grad")])
    (copy,) = prefix_ids([node], "p3-")
    assert copy.children[0].attrs["fill"] == "url(#p3-grad)"
    assert copy.children[1].attrs["id"] == "p3-grad"
    assert node.children[1].attrs["id"] == "grad"


def test_board_export_is_valid_svg():
    board = ChessBoard()
    board.setup_initial_position()
    svg = board.export_vector()
    root = ET.fromstring(svg)
    assert root.get("width") == "480"
    assert root.get("viewBox") == "0 0 480 480"
    ns = "{http://www.w3.org/2000/svg}"
    squares = root.findall(f"{ns}rect")
    assert len(squares) == 64
    groups = root.findall(f"{ns}g")
    assert len(groups) == 32
    ids = [e.get("id") for e in root.iter() if e.get("id")]
    assert len(ids) == len(set(ids))


def test_board_colors():
    board = CheckerBoard()
    board.update_board_colors("#ffffff", "#000000")
    assert board.square_color(0, 0) == "#ffffff"
    assert board.square_color(0, 1) == "#000000"
