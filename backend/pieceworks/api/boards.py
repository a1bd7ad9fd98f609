"""POST /api/boards/{kind} — compose a board of pieces into one SVG."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from pieceworks.displays.boards import BOARD_TYPES
from pieceworks.models.requests import BoardRequest
from pieceworks.models.responses import BoardResponse

router = APIRouter()


@router.post("/boards/{kind}", response_model=BoardResponse)
async def render_board(kind: str, request: BoardRequest) -> BoardResponse:
    board_cls = BOARD_TYPES.get(kind)
    if board_cls is None:
        raise HTTPException(status_code=404, detail=f"Unknown board kind: {kind}")

    board = board_cls(request.options)
    if request.initial_position:
        board.setup_initial_position()
    return BoardResponse(svg=board.export_vector(), pieces=len(board.pieces), size=board.pixel_size)
