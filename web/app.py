"""
FastAPI web application over the chess engine.

Three JSON endpoints, all stateless: the client sends the FEN piece placement
and the colour to move with every request, and gets the new placement back.

    POST /api/status   — check / checkmate / stalemate and the legal moves
    POST /api/move     — validate and play a player's move
    POST /api/ai-move  — let the engine choose and play a move

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the right home for the CPU-bound search.
- A pawn reaching the last rank without a `promotion` field is answered with
  result "promotion_pending" and the unchanged placement, so the client can
  ask its user and resend the move with a choice.
- Only the placement field of the FEN is read; castling and en passant do
  not exist in these rules.
"""

import logging
import threading

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from engine.board import Color, Position
from engine.constants import DEFAULT_DEPTH, MAX_DEPTH
from engine.moves import MoveResult, apply_engine_move, apply_move
from engine.rules import coerce_square, in_check, legal_moves
from engine.search import search
from engine.status import game_status

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Alpha-beta chess", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PositionRequest(BaseModel):
    """
    A position and the side to move.

    Fields:
        fen:   FEN string; only the piece placement field is used.
        color: "white" or "black" (case-insensitive), the side to move.
    """

    fen: str
    color: str = "white"

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("white", "black"):
            raise ValueError("color must be 'white' or 'black'")
        return v

    @property
    def side(self) -> Color:
        return Color.WHITE if self.color == "white" else Color.BLACK

    def position(self) -> Position:
        try:
            return Position.from_fen(self.fen)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc


class MoveRequest(PositionRequest):
    """A player's move: two algebraic squares and an optional promotion letter."""

    from_square: str
    to_square: str
    promotion: str | None = None


class AiMoveRequest(PositionRequest):
    """
    Engine move request.

    Fields:
        depth:      Plies to search, clamped to [1, MAX_DEPTH].
        time_limit: Optional budget in seconds, clamped to [0.1, 30.0]. When it
                    runs out the best fully searched move so far is played.
    """

    depth: int = DEFAULT_DEPTH
    time_limit: float | None = None

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to a range that answers within a request timeout."""
        return max(1, min(v, MAX_DEPTH))

    @field_validator("time_limit")
    @classmethod
    def clamp_time_limit(cls, v: float | None) -> float | None:
        return None if v is None else max(0.1, min(v, 30.0))


class StatusResponse(BaseModel):
    status: str
    in_check: bool
    legal_moves: list[str]


class MoveResponse(BaseModel):
    """
    Fields:
        result: "applied" or "promotion_pending".
        fen:    Placement after the move (unchanged when pending).
        color:  Side to move next.
        status: Game status for the side to move next.
    """

    result: str
    fen: str
    color: str
    status: str


class AiMoveResponse(BaseModel):
    """
    Fields:
        move:   Engine move, e.g. "e7e5".
        fen:    Placement after the move.
        color:  Side to move next.
        score:  Minimax score for the engine's side, or None if the time
                budget ran out before any move was fully searched.
        depth:  Plies searched.
        nodes:  Nodes visited.
        status: Game status for the side to move next.
    """

    move: str
    fen: str
    color: str
    score: int | None
    depth: int
    nodes: int
    status: str


def _color_name(color: Color) -> str:
    return str(color).lower()


def _require_not_over(position: Position, side: Color) -> None:
    status = game_status(position, side)
    if status.is_over:
        raise HTTPException(status_code=400, detail=f"Game is already over: {status.value}")


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/status", response_model=StatusResponse)
def api_status(request: PositionRequest) -> StatusResponse:
    """Report the game status and every legal move for the side to move."""
    position = request.position()
    side = request.side
    return StatusResponse(
        status=game_status(position, side).value,
        in_check=in_check(position, side),
        legal_moves=[str(move) for move in legal_moves(position, side)],
    )


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Validate and apply a player's move.

    Raises:
        HTTPException 400: Malformed FEN, game already over, moving a piece
                           of the wrong colour, or an illegal move.
    """
    position = request.position()
    side = request.side
    _require_not_over(position, side)

    origin = coerce_square(request.from_square)
    piece = position.piece_at(origin) if origin is not None else None
    if piece is not None and piece.color is not side:
        raise HTTPException(
            status_code=400,
            detail=f"Illegal move: {request.from_square} holds a {_color_name(piece.color)} piece",
        )

    result = apply_move(position, request.from_square, request.to_square, request.promotion)
    if result is MoveResult.ILLEGAL:
        raise HTTPException(
            status_code=400,
            detail=f"Illegal move: {request.from_square}{request.to_square}",
        )

    if result is MoveResult.PROMOTION_PENDING:
        return MoveResponse(
            result=result.value,
            fen=position.fen(),
            color=request.color,
            status=game_status(position, side).value,
        )

    next_side = side.opponent
    return MoveResponse(
        result=result.value,
        fen=position.fen(),
        color=_color_name(next_side),
        status=game_status(position, next_side).value,
    )


@app.post("/api/ai-move", response_model=AiMoveResponse)
def api_ai_move(request: AiMoveRequest) -> AiMoveResponse:
    """
    Let the engine pick and play a move for the side to move.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: The search failed or returned no move.
    """
    position = request.position()
    side = request.side
    _require_not_over(position, side)

    time_limit_ms = None if request.time_limit is None else request.time_limit * 1000
    try:
        result = search(position, side, request.depth, threading.Event(), time_limit_ms)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s score=%s depth=%d nodes=%d fen=%s",
        result.move,
        result.score,
        result.depth,
        result.nodes,
        request.fen[:40],
    )

    apply_engine_move(position, result.move)
    next_side = side.opponent
    return AiMoveResponse(
        move=str(result.move),
        fen=position.fen(),
        color=_color_name(next_side),
        score=result.score,
        depth=result.depth,
        nodes=result.nodes,
        status=game_status(position, next_side).value,
    )


def main() -> None:
    """Serve the API with uvicorn on localhost:8000."""
    uvicorn.run(app, host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
