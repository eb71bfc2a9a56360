"""
Engine constants: piece values, piece-square tables, and search parameters.

All numeric constants used throughout the engine are defined here so that
the rules, evaluation, and search modules never introduce magic numbers of
their own. Centralizing them keeps tuning in one place.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
Piece-square tables are written the way a board diagram reads: index 0 is
a8 (top-left), index 63 is h1 (bottom-right), and each table is laid out from
the evaluating side's point of view. The evaluator mirrors the row index for
pieces of the other colour.
"""

from engine.board import PieceType

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 20_000

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN:   PAWN_VALUE,
    PieceType.KNIGHT: KNIGHT_VALUE,
    PieceType.BISHOP: BISHOP_VALUE,
    PieceType.ROOK:   ROOK_VALUE,
    PieceType.QUEEN:  QUEEN_VALUE,
    PieceType.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Piece-square tables
# ---------------------------------------------------------------------------
# Tuples, not lists: these are shared module-level data and must never be
# mutated by a caller.

PAWN_TABLE: tuple[int, ...] = (
      0,   0,   0,   0,   0,   0,   0,   0,
     50,  50,  50,  50,  50,  50,  50,  50,
     10,  10,  20,  30,  30,  20,  10,  10,
      5,   5,  10,  25,  25,  10,   5,   5,
      0,   0,   0,  20,  20,   0,   0,   0,
      5,  -5, -10,   0,   0, -10,  -5,   5,
      5,  10,  10, -20, -20,  10,  10,   5,
      0,   0,   0,   0,   0,   0,   0,   0,
)

KNIGHT_TABLE: tuple[int, ...] = (
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20,   0,   0,   0,   0, -20, -40,
    -30,   0,  10,  15,  15,  10,   0, -30,
    -30,   5,  15,  20,  20,  15,   5, -30,
    -30,   0,  15,  20,  20,  15,   0, -30,
    -30,   5,  10,  15,  15,  10,   5, -30,
    -40, -20,   0,   5,   5,   0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
)

BISHOP_TABLE: tuple[int, ...] = (
    -20, -10, -10, -10, -10, -10, -10, -20,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -10,   0,   5,  10,  10,   5,   0, -10,
    -10,   5,   5,  10,  10,   5,   5, -10,
    -10,   0,  10,  10,  10,  10,   0, -10,
    -10,  10,  10,  10,  10,  10,  10, -10,
    -10,   5,   0,   0,   0,   0,   5, -10,
    -20, -10, -10, -10, -10, -10, -10, -20,
)

ROOK_TABLE: tuple[int, ...] = (
      0,   0,   0,   0,   0,   0,   0,   0,
      5,  10,  10,  10,  10,  10,  10,   5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
      0,   0,   0,   5,   5,   0,   0,   0,
)

QUEEN_TABLE: tuple[int, ...] = (
    -20, -10, -10,  -5,  -5, -10, -10, -20,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -10,   0,   5,   5,   5,   5,   0, -10,
     -5,   0,   5,   5,   5,   5,   0,  -5,
      0,   0,   5,   5,   5,   5,   0,  -5,
    -10,   5,   5,   5,   5,   5,   0, -10,
    -10,   0,   5,   0,   0,   0,   0, -10,
    -20, -10, -10,  -5,  -5, -10, -10, -20,
)

KING_TABLE: tuple[int, ...] = (
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -20, -30, -30, -40, -40, -30, -30, -20,
    -10, -20, -20, -20, -20, -20, -20, -10,
     20,  20,   0,   0,   0,   0,  20,  20,
     20,  30,  10,   0,   0,  10,  30,  20,
)

PST: dict[PieceType, tuple[int, ...]] = {
    PieceType.PAWN:   PAWN_TABLE,
    PieceType.KNIGHT: KNIGHT_TABLE,
    PieceType.BISHOP: BISHOP_TABLE,
    PieceType.ROOK:   ROOK_TABLE,
    PieceType.QUEEN:  QUEEN_TABLE,
    PieceType.KING:   KING_TABLE,
}

# ---------------------------------------------------------------------------
# Evaluation weights
# ---------------------------------------------------------------------------

# Centipawns per legal destination square of a piece.
MOBILITY_WEIGHT: int = 10

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# Plies searched by choose_move() when the caller does not ask for a depth.
DEFAULT_DEPTH: int = 3

# Upper bound accepted from outside callers (web API). Every leaf recomputes
# mobility from scratch, so depth 5+ takes minutes per move in CPython.
MAX_DEPTH: int = 4

# Score of a node whose side to move has no legal move at all. Checkmate and
# stalemate are not told apart, and the score does not depend on the ply.
TERMINAL_SCORE: int = 1_000

# Bounds for the root alpha-beta window. Larger than any reachable evaluation
# (two full armies plus kings stay well under 100k).
INFINITY: int = 1_000_000

# ---------------------------------------------------------------------------
# Game loop
# ---------------------------------------------------------------------------

# Pause between automated moves when two engines play each other on the
# console, so a human can follow the game.
AI_MOVE_DELAY_SECONDS: float = 1.0

# Piece a pawn becomes when the automated side promotes, or when a human
# just presses enter at the promotion prompt.
DEFAULT_PROMOTION: PieceType = PieceType.QUEEN
