"""
Game-state detection: check, checkmate, and stalemate for the side to move.

These probe every origin/destination pair of the side to move (up to 64x64
legality tests), so they are meant to be asked once per turn by a game loop,
never from inside the search tree.
"""

import enum

from engine.board import SQUARES, Color, Position
from engine.rules import in_check, is_legal

__all__ = [
    "GameStatus",
    "game_status",
    "has_legal_move",
    "in_check",
    "is_checkmate",
    "is_stalemate",
]


class GameStatus(enum.Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"

    @property
    def is_over(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)


def has_legal_move(position: Position, color: Color) -> bool:
    """
    True if `color` has at least one move that leaves its king unattacked.

    is_legal() plays each candidate on a snapshot and rejects it when the
    king is attacked afterwards, so the first legal move found answers the
    question. Stops at the first hit.
    """
    return any(
        is_legal(position, a, b)
        for a, _ in position.pieces(color)
        for b in SQUARES
    )


def is_checkmate(position: Position, color: Color) -> bool:
    return in_check(position, color) and not has_legal_move(position, color)


def is_stalemate(position: Position, color: Color) -> bool:
    return not in_check(position, color) and not has_legal_move(position, color)


def game_status(position: Position, color: Color) -> GameStatus:
    """Classify the position for `color` to move, testing check only once."""
    checked = in_check(position, color)
    if has_legal_move(position, color):
        return GameStatus.CHECK if checked else GameStatus.ONGOING
    return GameStatus.CHECKMATE if checked else GameStatus.STALEMATE
