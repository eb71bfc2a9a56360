"""
Console game loop: play chess in a terminal against the engine or a friend.

Three modes, chosen with --mode or at the prompt:
    1  Human (White) vs engine (Black)
    2  Human vs human
    3  Engine vs engine, pausing between moves so the game can be followed

Each turn the board is drawn, the game ends on checkmate or stalemate, a
check is announced, and then the side to move plays: the engine through
engine.search.choose_move(), a human by typing two squares ("e2 e4") or
"quit". A pawn reaching the last rank prompts the human for a piece; the
engine always takes a queen.

stdout carries the game. Diagnostics (search statistics, errors) go through
logging to stderr so they never interleave with the prompts.
"""

import argparse
import enum
import logging
import os
import sys
import time
from typing import Callable, TextIO

# ---------------------------------------------------------------------------
# Path setup: make 'engine' importable when this script is run directly
# (`python interface/console.py`) from a checkout that was not pip-installed.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from engine.board import Color, PieceType, Position, parse_square
from engine.constants import AI_MOVE_DELAY_SECONDS, DEFAULT_DEPTH, DEFAULT_PROMOTION
from engine.moves import MoveResult, apply_engine_move, apply_move, parse_promotion
from engine.search import choose_move
from engine.status import GameStatus, game_status

_log = logging.getLogger(__name__)

_FILES_LINE = "  a b c d e f g h"
_RULE_LINE = "  ───────────────"

# The numbered menu from the promotion prompt, alongside the piece letters.
_PROMOTION_MENU = {"1": "q", "2": "r", "3": "b", "4": "n"}


class GameMode(enum.Enum):
    HUMAN_VS_ENGINE = "1"
    HUMAN_VS_HUMAN = "2"
    ENGINE_VS_ENGINE = "3"

    @property
    def engine_colors(self) -> frozenset[Color]:
        if self is GameMode.HUMAN_VS_ENGINE:
            return frozenset({Color.BLACK})
        if self is GameMode.ENGINE_VS_ENGINE:
            return frozenset({Color.WHITE, Color.BLACK})
        return frozenset()


class ConsoleGame:
    """
    One game on a text console.

    Attributes:
        position: The live position; changed only through apply_move().
        turn:     Colour to move.
        mode:     Which sides the engine plays.
        depth:    Search depth for engine moves.
        delay:    Seconds to wait after each engine move in engine-vs-engine mode.
        plies:    Half-moves played so far.
    """

    def __init__(
        self,
        mode: GameMode,
        depth: int = DEFAULT_DEPTH,
        delay: float = AI_MOVE_DELAY_SECONDS,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        sleep: Callable[[float], None] = time.sleep,
        position: Position | None = None,
        turn: Color = Color.WHITE,
    ) -> None:
        self.position = position if position is not None else Position.initial()
        self.turn = turn
        self.mode = mode
        self.depth = depth
        self.delay = delay
        self.plies = 0
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._sleep = sleep

    # -----------------------------------------------------------------------
    # I/O helpers
    # -----------------------------------------------------------------------

    def _send(self, line: str = "") -> None:
        print(line, file=self._stdout, flush=True)

    def _ask(self, prompt: str) -> str | None:
        """Prompt and read one line; None on end of input."""
        print(prompt, end="", file=self._stdout, flush=True)
        line = self._stdin.readline()
        if not line:
            return None
        return line.strip()

    def render(self) -> None:
        rows = self.position.unicode().splitlines()
        self._send(_FILES_LINE)
        self._send(_RULE_LINE)
        for rank, row in zip(range(8, 0, -1), rows):
            self._send(f"{rank} {row} {rank}")
        self._send(_RULE_LINE)
        self._send(_FILES_LINE)

    # -----------------------------------------------------------------------
    # Turns
    # -----------------------------------------------------------------------

    def play(self, max_plies: int | None = None) -> GameStatus | None:
        """
        Run the game until it ends.

        Returns the final GameStatus (CHECKMATE or STALEMATE), or None if a
        player quit, input ran out, the engine found no move, or max_plies
        half-moves were played.
        """
        while max_plies is None or self.plies < max_plies:
            self.render()

            status = game_status(self.position, self.turn)
            if status is GameStatus.CHECKMATE:
                self._send(f"Checkmate! {self.turn.opponent} wins!")
                return status
            if status is GameStatus.STALEMATE:
                self._send("Stalemate! The game is a draw!")
                return status
            if status is GameStatus.CHECK:
                self._send(f"{self.turn} is in check!")

            if self.turn in self.mode.engine_colors:
                played = self.play_engine_turn()
            else:
                played = self.play_human_turn()
            if played is None:
                return None
            if played:
                self.turn = self.turn.opponent
                self.plies += 1
        return None

    def play_engine_turn(self) -> bool | None:
        self._send(f"{self.turn} AI is thinking...")
        move = choose_move(self.position, self.turn, self.depth)
        if move is None:
            self._send("AI couldn't find a valid move!")
            return None

        self._send(f"{self.turn} AI moves: {move.from_square} to {move.to_square}")
        if self.mode is GameMode.ENGINE_VS_ENGINE:
            self._sleep(self.delay)

        result = apply_engine_move(self.position, move)
        if not result:
            # choose_move only returns legal moves; this is a bug if it happens.
            _log.error("engine move %s was rejected: %s", move, result.value)
            return None
        return True

    def play_human_turn(self) -> bool | None:
        """
        Read and play one human move.

        Returns True when a move was played, False when the input was rejected
        (the same side moves again), None when the player quit.
        """
        line = self._ask(f"{self.turn}'s turn (e.g., 'e2 e4' or 'quit'): ")
        if line is None or line == "quit":
            return None

        parts = line.split()
        if len(parts) != 2:
            self._send("Invalid input format. Use 'from to' (e.g., 'e2 e4')")
            return False

        from_square, to_square = parts
        origin = parse_square(from_square)
        piece = self.position.piece_at(origin) if origin is not None else None
        if piece is not None and piece.color is not self.turn:
            self._send("Invalid move!")
            return False

        result = apply_move(self.position, from_square, to_square)
        if result is MoveResult.PROMOTION_PENDING:
            choice = self._ask_promotion()
            if choice is None:
                return None
            result = apply_move(self.position, from_square, to_square, choice)

        if not result:
            self._send("Invalid move!")
            return False
        return True

    def _ask_promotion(self) -> PieceType | None:
        """Ask which piece to promote to; anything unrecognised means a queen."""
        self._send("Promote pawn to:")
        self._send("1. Queen")
        self._send("2. Rook")
        self._send("3. Bishop")
        self._send("4. Knight")
        answer = self._ask("Choose promotion (1-4 or q/r/b/n): ")
        if answer is None:
            return None
        return parse_promotion(_PROMOTION_MENU.get(answer, answer)) or DEFAULT_PROMOTION


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play chess against the alpha-beta engine")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GameMode],
        default=None,
        help="1: vs engine, 2: two players, 3: engine vs engine (asked if omitted)",
    )
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="Engine search depth in plies")
    parser.add_argument(
        "--delay",
        type=float,
        default=AI_MOVE_DELAY_SECONDS,
        help="Seconds between engine moves in mode 3",
    )
    parser.add_argument("--max-plies", type=int, default=None, help="Stop after this many half-moves")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search statistics to stderr")
    args = parser.parse_args(argv)
    if args.depth < 1:
        parser.error("--depth must be at least 1")
    return args


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(list(sys.argv[1:] if argv is None else argv))
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Welcome to console chess!")
    mode_text = args.mode
    if mode_text is None:
        print("1. Play against AI")
        print("2. Play against another player")
        print("3. Watch AI vs AI")
        print("Choose game mode (1-3): ", end="", flush=True)
        mode_text = sys.stdin.readline().strip()

    try:
        mode = GameMode(mode_text)
    except ValueError:
        # Anything unrecognised is a two-player game, as in the menu's fallback.
        mode = GameMode.HUMAN_VS_HUMAN

    if mode is GameMode.HUMAN_VS_ENGINE:
        print("You'll play as White against the AI (Black)")
    elif mode is GameMode.ENGINE_VS_ENGINE:
        print("Watch two AIs play against each other!")
        print(f"Game will advance automatically with {args.delay:g} second delay between moves.")
        print("Press Ctrl+C to end the game.")

    game = ConsoleGame(mode, depth=args.depth, delay=args.delay)
    try:
        game.play(max_plies=args.max_plies)
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
