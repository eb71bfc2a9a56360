"""
Move legality: per-piece geometry, path clearance, and the self-check filter.

There are two predicates, and the split is what keeps attack detection from
recursing forever:

    is_pseudo_legal(position, a, b)
        Occupancy + geometry + path clearance. Answers "can the piece on a
        physically reach b". This is what in_check() uses to decide whether
        a king is attacked.

    is_legal(position, a, b)
        is_pseudo_legal() plus the self-check filter: play the move on a
        snapshot and reject it if the mover's own king is then attacked.

Both are total: malformed coordinates, empty origin squares, and impossible
moves all return False rather than raising.

Enumeration order matters to the search (first move wins ties), so every
enumeration here walks origins and destinations in grid order: a8..h8, then
a7..h7, down to h1.
"""

from typing import NamedTuple

from engine.board import SQUARES, Color, Piece, PieceType, Position, Square, parse_square


class Move(NamedTuple):
    """A (from, to) pair. Capture and promotion are derived from the position."""

    from_square: Square
    to_square: Square

    @classmethod
    def parse(cls, from_text: str, to_text: str) -> "Move | None":
        from_square = parse_square(from_text)
        to_square = parse_square(to_text)
        if from_square is None or to_square is None:
            return None
        return cls(from_square, to_square)

    def __str__(self) -> str:
        return f"{self.from_square.name}{self.to_square.name}"


def coerce_square(square: Square | str) -> Square | None:
    """Accept a Square or an algebraic name; None if it is not on the board."""
    if isinstance(square, Square):
        return square if 0 <= square.file < 8 and 0 <= square.row < 8 else None
    return parse_square(square)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def _pawn_reaches(position: Position, a: Square, b: Square, color: Color) -> bool:
    direction = color.pawn_direction
    dx = b.file - a.file
    dy = b.row - a.row

    if dx == 0:
        if dy == direction:
            return position.piece_at(b) is None
        if dy == 2 * direction and a.row == color.pawn_start_row:
            between = Square(a.file, a.row + direction)
            return position.piece_at(between) is None and position.piece_at(b) is None
        return False

    # Diagonal steps are captures only; there is no en passant.
    if abs(dx) == 1 and dy == direction:
        return position.piece_at(b) is not None
    return False


def _rook_reaches(position: Position, a: Square, b: Square) -> bool:
    if a.file != b.file and a.row != b.row:
        return False
    if a.file == b.file:
        low, high = sorted((a.row, b.row))
        return all(position.piece_at(Square(a.file, row)) is None for row in range(low + 1, high))
    low, high = sorted((a.file, b.file))
    return all(position.piece_at(Square(file, a.row)) is None for file in range(low + 1, high))


def _bishop_reaches(position: Position, a: Square, b: Square) -> bool:
    dx = b.file - a.file
    dy = b.row - a.row
    if abs(dx) != abs(dy) or dx == 0:
        return False
    step_x = 1 if dx > 0 else -1
    step_y = 1 if dy > 0 else -1
    for i in range(1, abs(dx)):
        if position.piece_at(Square(a.file + i * step_x, a.row + i * step_y)) is not None:
            return False
    return True


def _knight_reaches(a: Square, b: Square) -> bool:
    dx = abs(b.file - a.file)
    dy = abs(b.row - a.row)
    return (dx == 2 and dy == 1) or (dx == 1 and dy == 2)


def _king_reaches(a: Square, b: Square) -> bool:
    return abs(b.file - a.file) <= 1 and abs(b.row - a.row) <= 1


def _reaches(position: Position, piece: Piece, a: Square, b: Square) -> bool:
    kind = piece.type
    if kind is PieceType.PAWN:
        return _pawn_reaches(position, a, b, piece.color)
    if kind is PieceType.ROOK:
        return _rook_reaches(position, a, b)
    if kind is PieceType.BISHOP:
        return _bishop_reaches(position, a, b)
    if kind is PieceType.KNIGHT:
        return _knight_reaches(a, b)
    if kind is PieceType.QUEEN:
        return _rook_reaches(position, a, b) or _bishop_reaches(position, a, b)
    return _king_reaches(a, b)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_pseudo_legal(position: Position, from_square: Square | str, to_square: Square | str) -> bool:
    """
    Occupancy, geometry, and path checks without the self-check filter.

    Returns False when either coordinate is malformed, when from_square is
    empty, when to_square holds a piece of the mover's colour (this also
    rules out the null move a->a), or when the piece cannot travel there.
    """
    a = coerce_square(from_square)
    b = coerce_square(to_square)
    if a is None or b is None:
        return False

    piece = position.piece_at(a)
    if piece is None:
        return False
    target = position.piece_at(b)
    if target is not None and target.color is piece.color:
        return False

    return _reaches(position, piece, a, b)


def in_check(position: Position, color: Color) -> bool:
    """
    True if some piece of the other colour can reach `color`'s king.

    Reachability uses is_pseudo_legal(): an attacking piece still attacks
    even if moving it would expose its own king. A side with no king on the
    board is never in check.
    """
    king = position.king_square(color)
    if king is None:
        return False
    return any(
        is_pseudo_legal(position, square, king)
        for square, _ in position.pieces(color.opponent)
    )


def is_legal(position: Position, from_square: Square | str, to_square: Square | str) -> bool:
    """
    Full legality: is_pseudo_legal() and the mover's king is safe afterwards.

    The move is played on a snapshot; `position` is never modified.
    """
    a = coerce_square(from_square)
    b = coerce_square(to_square)
    if a is None or b is None or not is_pseudo_legal(position, a, b):
        return False

    mover = position.piece_at(a).color
    successor = position.copy()
    successor.relocate(a, b)
    return not in_check(successor, mover)


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------


def legal_destinations(position: Position, from_square: Square | str) -> list[Square]:
    """All squares the piece on from_square may legally move to, in grid order."""
    a = coerce_square(from_square)
    if a is None or position.piece_at(a) is None:
        return []
    return [b for b in SQUARES if is_legal(position, a, b)]


def legal_moves(position: Position, color: Color) -> list[Move]:
    """Every legal move for `color`, origins then destinations in grid order."""
    return [
        Move(a, b)
        for a, _ in position.pieces(color)
        for b in SQUARES
        if is_legal(position, a, b)
    ]


def is_promotion(position: Position, from_square: Square | str, to_square: Square | str) -> bool:
    """True if the move takes a pawn onto its last rank. Legality is not checked."""
    a = coerce_square(from_square)
    b = coerce_square(to_square)
    if a is None or b is None:
        return False
    piece = position.piece_at(a)
    return (
        piece is not None
        and piece.type is PieceType.PAWN
        and b.row == piece.color.promotion_row
    )
