"""
Position model: colours, pieces, squares, and the 8x8 grid.

This module is pure data. It knows nothing about which moves are legal; the
only mutation it offers is relocate(), an unchecked "put the piece from A on
B" used by the rules module after a move has been validated and by the
search when it plays out a branch on a snapshot.

Coordinates:
    A Square is (file, row). file 0..7 maps to 'a'..'h'. row 0 is rank 8 (the
    top of a board diagram) and row 7 is rank 1, so the grid reads the same
    way a printed board does. The flat cell offset is row * 8 + file.

python-chess is used for the text codecs only (square names, FEN placement,
unicode rendering). All rules live in engine.rules.
"""

import enum
from dataclasses import dataclass
from typing import Iterator, NamedTuple

import chess


class Color(enum.Enum):
    """Side colour. Values are python-chess colours (WHITE is True)."""

    WHITE = chess.WHITE
    BLACK = chess.BLACK

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        """Row delta of a pawn step. White moves up the diagram (row decreases)."""
        return -1 if self is Color.WHITE else 1

    @property
    def pawn_start_row(self) -> int:
        return 6 if self is Color.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Color.WHITE else 7

    def __str__(self) -> str:
        return self.name.capitalize()


class PieceType(enum.IntEnum):
    """Piece kinds, numbered like python-chess piece types."""

    PAWN = chess.PAWN
    KNIGHT = chess.KNIGHT
    BISHOP = chess.BISHOP
    ROOK = chess.ROOK
    QUEEN = chess.QUEEN
    KING = chess.KING

    @classmethod
    def from_symbol(cls, symbol: str) -> "PieceType":
        """Parse a piece letter in either case ('q', 'N', ...). Raises ValueError."""
        try:
            return cls(chess.PIECE_SYMBOLS.index(symbol.lower()))
        except ValueError:
            raise ValueError(f"unknown piece symbol: {symbol!r}") from None


@dataclass(frozen=True)
class Piece:
    """A piece is just its type and colour; two equal pieces are interchangeable."""

    type: PieceType
    color: Color

    def symbol(self) -> str:
        """FEN letter: uppercase for White, lowercase for Black."""
        return chess.Piece(int(self.type), self.color.value).symbol()

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        piece = chess.Piece.from_symbol(symbol)
        return cls(PieceType(piece.piece_type), Color(piece.color))


class Square(NamedTuple):
    """Grid coordinate. row 0 is rank 8, row 7 is rank 1."""

    file: int
    row: int

    @property
    def offset(self) -> int:
        return self.row * 8 + self.file

    @property
    def name(self) -> str:
        """Algebraic name, e.g. Square(4, 6).name == 'e2'."""
        return chess.square_name(_to_chess_square(self))

    @classmethod
    def from_offset(cls, offset: int) -> "Square":
        return cls(offset % 8, offset // 8)

    def __str__(self) -> str:
        return self.name


# All 64 squares in grid order: a8, b8, ... h8, a7, ... h1.
SQUARES: tuple[Square, ...] = tuple(Square.from_offset(i) for i in range(64))


def _to_chess_square(square: Square) -> chess.Square:
    return chess.square(square.file, 7 - square.row)


def _from_chess_square(square: chess.Square) -> Square:
    return Square(chess.square_file(square), 7 - chess.square_rank(square))


def parse_square(text: object) -> Square | None:
    """
    Parse an algebraic square name such as "e2".

    Exactly two characters are accepted: a file letter 'a'..'h' followed by a
    rank digit '1'..'8'. Anything else (wrong length, upper case, out of
    range) returns None rather than raising, so callers can treat a malformed
    coordinate exactly like an illegal move.
    """
    if not isinstance(text, str) or len(text) != 2 or text not in chess.SQUARE_NAMES:
        return None
    return _from_chess_square(chess.parse_square(text))


_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Position:
    """
    An 8x8 grid where each cell holds at most one Piece.

    The grid is a flat list of 64 cells so that copy() is a single list slice;
    the search takes one snapshot per explored branch and never shares a
    snapshot between branches.

    No invariant is enforced at construction. The rules assume at most one
    king per colour, and treat a missing king as "never in check".
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: list[Piece | None] | None = None) -> None:
        if cells is None:
            cells = [None] * 64
        elif len(cells) != 64:
            raise ValueError(f"a position has 64 cells, got {len(cells)}")
        self._cells: list[Piece | None] = cells

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Position":
        return cls()

    @classmethod
    def initial(cls) -> "Position":
        """The standard starting layout."""
        position = cls()
        for file, piece_type in enumerate(_BACK_RANK):
            position.set_piece(Square(file, 0), Piece(piece_type, Color.BLACK))
            position.set_piece(Square(file, 1), Piece(PieceType.PAWN, Color.BLACK))
            position.set_piece(Square(file, 6), Piece(PieceType.PAWN, Color.WHITE))
            position.set_piece(Square(file, 7), Piece(piece_type, Color.WHITE))
        return position

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        """
        Build a position from a FEN string.

        Only the piece placement field is read; side to move, castling and
        en passant fields are ignored because the rules here have no use for
        them. Raises ValueError on a malformed placement.
        """
        placement = fen.strip().split(" ", 1)[0]
        board = chess.BaseBoard(placement)
        position = cls()
        for square, piece in board.piece_map().items():
            position.set_piece(
                _from_chess_square(square),
                Piece(PieceType(piece.piece_type), Color(piece.color)),
            )
        return position

    def to_base_board(self) -> chess.BaseBoard:
        board = chess.BaseBoard.empty()
        for square, piece in self.pieces():
            board.set_piece_at(
                _to_chess_square(square),
                chess.Piece(int(piece.type), piece.color.value),
            )
        return board

    def fen(self) -> str:
        """FEN piece placement field, e.g. 'rnbqkbnr/pppppppp/8/...'."""
        return self.to_base_board().board_fen()

    def unicode(self, empty_square: str = "·") -> str:
        """Board diagram with unicode chess symbols, rank 8 first."""
        return self.to_base_board().unicode(empty_square=empty_square, borders=False)

    # -----------------------------------------------------------------------
    # Access
    # -----------------------------------------------------------------------

    def piece_at(self, square: Square) -> Piece | None:
        return self._cells[square.row * 8 + square.file]

    def set_piece(self, square: Square, piece: Piece | None) -> None:
        self._cells[square.row * 8 + square.file] = piece

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield (square, piece) in grid order, optionally for one colour only."""
        for index, piece in enumerate(self._cells):
            if piece is not None and (color is None or piece.color is color):
                yield SQUARES[index], piece

    def king_square(self, color: Color) -> Square | None:
        king = Piece(PieceType.KING, color)
        for index, piece in enumerate(self._cells):
            if piece == king:
                return SQUARES[index]
        return None

    # -----------------------------------------------------------------------
    # Snapshots and mutation
    # -----------------------------------------------------------------------

    def copy(self) -> "Position":
        # Pieces are frozen, so a shallow copy of the cell list is a full snapshot.
        return Position(self._cells[:])

    def relocate(
        self,
        from_square: Square,
        to_square: Square,
        promotion: PieceType | None = None,
    ) -> Piece | None:
        """
        Move whatever stands on from_square to to_square, unchecked.

        Any occupant of to_square is overwritten (captured). A pawn that lands
        on its promotion row becomes `promotion`, or a queen when no choice is
        given. Returns the captured piece, if any.
        """
        piece = self._cells[from_square.offset]
        captured = self._cells[to_square.offset]
        if (
            piece is not None
            and piece.type is PieceType.PAWN
            and to_square.row == piece.color.promotion_row
        ):
            piece = Piece(promotion or PieceType.QUEEN, piece.color)
        self._cells[to_square.offset] = piece
        self._cells[from_square.offset] = None
        return captured

    # -----------------------------------------------------------------------
    # Dunder helpers
    # -----------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Position({self.fen()!r})"

    def __str__(self) -> str:
        return self.unicode()


def new_initial_position() -> Position:
    return Position.initial()
