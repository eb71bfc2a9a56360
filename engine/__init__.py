"""
Chess rules engine and alpha-beta opponent.

This package implements the rules of chess (without castling or en passant)
and a fixed-depth minimax search with alpha-beta pruning that plays against
them.

Modules:
    board     — Colours, pieces, squares, and the 8x8 Position grid
    constants — Piece values, piece-square tables, and search parameters
    rules     — Move geometry, legality, attack detection, move enumeration
    status    — Check, checkmate, and stalemate detection
    moves     — Validated move application with the promotion hook
    evaluate  — Static evaluation (material + piece-square tables + mobility)
    search    — Minimax with alpha-beta pruning and cancellation
"""

from engine.board import Color, Piece, PieceType, Position, Square, new_initial_position, parse_square
from engine.moves import MoveResult, apply_move
from engine.rules import Move, in_check, is_legal, legal_moves
from engine.search import choose_move
from engine.status import GameStatus, game_status, is_checkmate, is_stalemate

__all__ = [
    "Color",
    "GameStatus",
    "Move",
    "MoveResult",
    "Piece",
    "PieceType",
    "Position",
    "Square",
    "apply_move",
    "choose_move",
    "game_status",
    "in_check",
    "is_checkmate",
    "is_legal",
    "is_stalemate",
    "legal_moves",
    "new_initial_position",
    "parse_square",
]
