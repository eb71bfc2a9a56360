import io

from engine.board import Color, Piece, PieceType, Position, parse_square
from engine.status import GameStatus
from interface.console import ConsoleGame, GameMode, main

from tests.positions import PAWN_ENDING, PROMOTION


def make_game(mode, lines, **kwargs):
    stdout = io.StringIO()
    game = ConsoleGame(mode, stdin=io.StringIO(lines), stdout=stdout, **kwargs)
    return game, stdout


class TestHumanGame:
    def test_fools_mate(self):
        game, out = make_game(GameMode.HUMAN_VS_HUMAN, "f2 f3\ne7 e5\ng2 g4\nd8 h4\n")
        assert game.play() is GameStatus.CHECKMATE
        assert "Checkmate! Black wins!" in out.getvalue()
        assert game.plies == 4

    def test_bad_input_keeps_the_turn(self):
        game, out = make_game(GameMode.HUMAN_VS_HUMAN, "e2\ne2 e5\ne7 e5\nquit\n")
        assert game.play() is None
        text = out.getvalue()
        assert "Invalid input format" in text
        assert text.count("Invalid move!") == 2
        assert game.turn is Color.WHITE
        assert game.plies == 0

    def test_end_of_input_ends_the_game(self):
        game, _ = make_game(GameMode.HUMAN_VS_HUMAN, "e2 e4\n")
        assert game.play() is None
        assert game.turn is Color.BLACK

    def test_check_is_announced(self):
        game, out = make_game(
            GameMode.HUMAN_VS_HUMAN,
            "quit\n",
            position=Position.from_fen("4k3/8/8/8/8/8/8/r3K3"),
        )
        game.play()
        assert "White is in check!" in out.getvalue()

    def test_promotion_prompt(self):
        game, out = make_game(
            GameMode.HUMAN_VS_HUMAN,
            "a7 a8\n4\n",
            position=Position.from_fen(PROMOTION),
        )
        game.play()
        assert "Promote pawn to:" in out.getvalue()
        assert game.position.piece_at(parse_square("a8")) == Piece(PieceType.KNIGHT, Color.WHITE)

    def test_promotion_defaults_to_queen(self):
        game, _ = make_game(
            GameMode.HUMAN_VS_HUMAN,
            "a7 a8\nwhatever\n",
            position=Position.from_fen(PROMOTION),
        )
        game.play()
        assert game.position.piece_at(parse_square("a8")) == Piece(PieceType.QUEEN, Color.WHITE)

    def test_board_is_drawn_with_coordinates(self):
        game, out = make_game(GameMode.HUMAN_VS_HUMAN, "quit\n")
        game.play()
        lines = out.getvalue().splitlines()
        assert lines[0] == "  a b c d e f g h"
        assert lines[2].startswith("8 ") and lines[2].endswith(" 8")
        assert lines[9].startswith("1 ")

    def test_stalemate_ends_the_game(self):
        game, out = make_game(
            GameMode.HUMAN_VS_HUMAN,
            "",
            position=Position.from_fen("k7/8/1Q6/8/8/8/8/7K"),
            turn=Color.BLACK,
        )
        assert game.play() is GameStatus.STALEMATE
        assert "Stalemate! The game is a draw!" in out.getvalue()


class TestEngineGame:
    def test_engine_vs_engine_waits_between_moves(self):
        pauses = []
        game, out = make_game(
            GameMode.ENGINE_VS_ENGINE,
            "",
            depth=1,
            delay=0.25,
            sleep=pauses.append,
            position=Position.from_fen(PAWN_ENDING),
        )
        assert game.play(max_plies=2) is None
        assert pauses == [0.25, 0.25]
        assert "White AI moves:" in out.getvalue()
        assert "Black AI moves:" in out.getvalue()
        assert game.plies == 2

    def test_engine_answers_human(self):
        pauses = []
        game, out = make_game(
            GameMode.HUMAN_VS_ENGINE,
            "e2 e4\n",
            depth=1,
            sleep=pauses.append,
            position=Position.from_fen(PAWN_ENDING),
        )
        game.play(max_plies=2)
        assert game.turn is Color.WHITE
        assert "Black AI is thinking..." in out.getvalue()
        assert pauses == []

    def test_mode_engine_colors(self):
        assert GameMode.HUMAN_VS_ENGINE.engine_colors == {Color.BLACK}
        assert GameMode.HUMAN_VS_HUMAN.engine_colors == set()
        assert len(GameMode.ENGINE_VS_ENGINE.engine_colors) == 2


class TestMain:
    def test_main_with_mode_flag(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("quit\n"))
        assert main(["--mode", "2"]) == 0
        assert "Welcome to console chess!" in capsys.readouterr().out

    def test_main_asks_for_mode(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1\nquit\n"))
        assert main([]) == 0
        assert "You'll play as White against the AI (Black)" in capsys.readouterr().out
