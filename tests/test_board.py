import chess
import pytest

from engine.board import (
    SQUARES,
    Color,
    Piece,
    PieceType,
    Position,
    Square,
    new_initial_position,
    parse_square,
)


class TestSquare:
    def test_every_name_round_trips(self):
        for name in chess.SQUARE_NAMES:
            square = parse_square(name)
            assert square is not None
            assert square.name == name

    def test_grid_mapping(self):
        assert parse_square("a8") == Square(0, 0)
        assert parse_square("h1") == Square(7, 7)
        assert parse_square("e2") == Square(4, 6)
        assert parse_square("d5") == Square(3, 3)

    @pytest.mark.parametrize(
        "text",
        ["", "e", "e22", "i1", "a0", "a9", "E2", "2e", " e2", "e2 ", "@1", None, 42],
    )
    def test_malformed_names_are_rejected(self, text):
        assert parse_square(text) is None

    def test_grid_order(self):
        assert [s.name for s in SQUARES[:9]] == ["a8", "b8", "c8", "d8", "e8", "f8", "g8", "h8", "a7"]
        assert SQUARES[-1].name == "h1"
        assert all(square.offset == i for i, square in enumerate(SQUARES))


class TestPiece:
    def test_symbols(self):
        assert Piece(PieceType.KNIGHT, Color.WHITE).symbol() == "N"
        assert Piece(PieceType.QUEEN, Color.BLACK).symbol() == "q"
        assert Piece.from_symbol("k") == Piece(PieceType.KING, Color.BLACK)

    def test_piece_type_from_symbol(self):
        assert PieceType.from_symbol("R") is PieceType.ROOK
        with pytest.raises(ValueError):
            PieceType.from_symbol("x")

    def test_interchangeable(self):
        assert Piece(PieceType.PAWN, Color.WHITE) == Piece(PieceType.PAWN, Color.WHITE)

    def test_color_helpers(self):
        assert Color.WHITE.opponent is Color.BLACK
        assert Color.BLACK.opponent is Color.WHITE
        assert str(Color.WHITE) == "White"


class TestPosition:
    def test_initial_layout(self, initial):
        assert initial.fen() == chess.STARTING_BOARD_FEN
        assert new_initial_position() == initial
        assert initial.piece_at(parse_square("e1")) == Piece(PieceType.KING, Color.WHITE)
        assert initial.piece_at(parse_square("d8")) == Piece(PieceType.QUEEN, Color.BLACK)
        assert initial.piece_at(parse_square("e4")) is None
        assert len(list(initial.pieces())) == 32
        assert len(list(initial.pieces(Color.BLACK))) == 16

    def test_fen_round_trip(self):
        fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"
        assert Position.from_fen(fen).fen() == fen

    def test_from_fen_ignores_extra_fields(self):
        position = Position.from_fen(chess.STARTING_FEN)
        assert position == Position.initial()

    @pytest.mark.parametrize("fen", ["", "not a fen", "8/8/8/8/8/8/8", "9/8/8/8/8/8/8/8"])
    def test_from_fen_rejects_garbage(self, fen):
        with pytest.raises(ValueError):
            Position.from_fen(fen)

    def test_copy_is_independent(self, initial):
        snapshot = initial.copy()
        snapshot.relocate(parse_square("e2"), parse_square("e4"))
        assert initial.piece_at(parse_square("e2")) is not None
        assert snapshot.piece_at(parse_square("e2")) is None
        assert snapshot != initial

    def test_relocate_captures(self):
        position = Position.from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
        captured = position.relocate(parse_square("e4"), parse_square("d5"))
        assert captured == Piece(PieceType.PAWN, Color.BLACK)
        assert position.piece_at(parse_square("d5")) == Piece(PieceType.PAWN, Color.WHITE)

    def test_relocate_promotes(self):
        position = Position.from_fen("8/P7/8/8/8/8/7p/8")
        position.relocate(parse_square("a7"), parse_square("a8"))
        position.relocate(parse_square("h2"), parse_square("h1"), PieceType.KNIGHT)
        assert position.piece_at(parse_square("a8")) == Piece(PieceType.QUEEN, Color.WHITE)
        assert position.piece_at(parse_square("h1")) == Piece(PieceType.KNIGHT, Color.BLACK)

    def test_king_square(self, initial):
        assert initial.king_square(Color.WHITE) == parse_square("e1")
        assert Position.empty().king_square(Color.BLACK) is None

    def test_cell_count_checked(self):
        with pytest.raises(ValueError):
            Position([None] * 63)

    def test_unicode_has_eight_rows(self, initial):
        rows = initial.unicode().splitlines()
        assert len(rows) == 8
        assert "♚" in rows[0]
