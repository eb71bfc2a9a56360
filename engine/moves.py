"""
Applying a move at the boundary between the engine and a game loop.

apply_move() is the one validated way to change a Position. A rejected move
never touches the position. A pawn move onto the last rank needs a piece
choice; when none is supplied, the move is reported as PROMOTION_PENDING and
the position is left as it was, so the caller (a console prompt, a web client)
can ask its user and call again with the choice. Nothing here reads input.
"""

import enum
import logging

from engine.board import PieceType, Position, Square
from engine.constants import DEFAULT_PROMOTION
from engine.rules import Move, coerce_square, is_legal, is_promotion

_log = logging.getLogger(__name__)

# Pieces a pawn may become.
PROMOTION_CHOICES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class MoveResult(enum.Enum):
    APPLIED = "applied"
    ILLEGAL = "illegal"
    PROMOTION_PENDING = "promotion_pending"

    def __bool__(self) -> bool:
        return self is MoveResult.APPLIED


def parse_promotion(choice: PieceType | str | None) -> PieceType | None:
    """
    Normalise a promotion choice.

    Accepts a PieceType or a piece letter ('q', 'R', ...). Returns None for
    anything that is not a valid promotion piece (kings, pawns, junk).
    """
    if choice is None:
        return None
    if isinstance(choice, str):
        try:
            choice = PieceType.from_symbol(choice)
        except ValueError:
            return None
    return choice if choice in PROMOTION_CHOICES else None


def apply_move(
    position: Position,
    from_square: Square | str,
    to_square: Square | str,
    promotion: PieceType | str | None = None,
) -> MoveResult:
    """
    Validate and play a move in place.

    Args:
        position:    Modified only when the result is APPLIED.
        from_square: Origin, as a Square or an algebraic name like "e2".
        to_square:   Destination, same forms.
        promotion:   Piece to promote to when a pawn reaches its last rank.
                     Ignored for every other move.

    Returns:
        APPLIED, ILLEGAL (bad coordinates, illegal move, or an invalid
        promotion piece), or PROMOTION_PENDING (legal promotion, no choice).
    """
    a = coerce_square(from_square)
    b = coerce_square(to_square)
    if a is None or b is None or not is_legal(position, a, b):
        return MoveResult.ILLEGAL

    piece_type = None
    if is_promotion(position, a, b):
        if promotion is None:
            return MoveResult.PROMOTION_PENDING
        piece_type = parse_promotion(promotion)
        if piece_type is None:
            _log.debug("rejecting promotion choice %r for %s%s", promotion, a, b)
            return MoveResult.ILLEGAL

    position.relocate(a, b, piece_type)
    return MoveResult.APPLIED


def apply_engine_move(position: Position, move: Move) -> MoveResult:
    """Play a move chosen by the search; promotions always become a queen."""
    return apply_move(position, move.from_square, move.to_square, DEFAULT_PROMOTION)
