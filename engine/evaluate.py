"""
Static evaluation: material + piece-square tables + mobility.

The search needs a number for every leaf position so it can compare lines.
This module produces that number from one colour's point of view (the
"perspective"); positive means the perspective side is better off.

Each piece contributes three terms:

    material  fixed centipawn value of the piece type (PIECE_VALUES)
    position  bonus from the piece type's 64-entry table (PST)
    mobility  MOBILITY_WEIGHT for every legal destination of the piece

Pieces of the perspective colour add (material + position + mobility).
Opposing pieces subtract (material + position - mobility), where their
mobility term is already negated, so an opponent's freedom of movement
counts against the perspective side as well.

Table orientation:
    The tables are written from the top of the board (index 0 = a8). A piece
    of the perspective colour reads its own cell directly; a piece of the
    other colour reads the vertically mirrored cell, (7 - row) * 8 + file.
    The mirror is an index transform; each table exists once.

Nothing is cached. Mobility runs the full legality test for every piece
against every square, which dominates the cost of a search.
"""

from engine.board import Color, Position, Square
from engine.constants import MOBILITY_WEIGHT, PIECE_VALUES, PST
from engine.rules import legal_destinations


def table_index(square: Square, mirrored: bool) -> int:
    """Cell of a piece-square table for a piece on `square`."""
    row = 7 - square.row if mirrored else square.row
    return row * 8 + square.file


def evaluate(position: Position, perspective: Color) -> int:
    """
    Centipawn score of `position` for `perspective`.

    Args:
        position:    The position to score. Not modified.
        perspective: The colour the score is for.

    Returns:
        Integer score; higher is better for `perspective`. Kings count their
        20000 material value, so a side missing its king scores hopelessly.

    Example:
        >>> from engine.board import Color, Position
        >>> evaluate(Position.initial(), Color.WHITE)
        0
    """
    score = 0

    for square, piece in position.pieces():
        own = piece.color is perspective
        material = PIECE_VALUES[piece.type]
        placement = PST[piece.type][table_index(square, mirrored=not own)]
        moves = len(legal_destinations(position, square)) * MOBILITY_WEIGHT
        mobility = moves if own else -moves

        if own:
            score += material + placement + mobility
        else:
            score -= material + placement - mobility

    return score
