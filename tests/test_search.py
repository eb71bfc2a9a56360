import threading

import pytest

from engine.board import Color, Position
from engine.constants import DEFAULT_PROMOTION, TERMINAL_SCORE
from engine.evaluate import evaluate
from engine.rules import Move, legal_moves
from engine.search import SearchState, choose_move, minimax, search

from tests.positions import BACK_RANK, FOOLS_MATE, PAWN_ENDING, PROMOTION, STALEMATE


def full_minimax(position, depth, maximizing, color):
    """Reference minimax without pruning."""
    if depth == 0:
        return evaluate(position, color)
    side = color if maximizing else color.opponent
    moves = legal_moves(position, side)
    if not moves:
        return -TERMINAL_SCORE if maximizing else TERMINAL_SCORE
    values = []
    for move in moves:
        child = position.copy()
        child.relocate(move.from_square, move.to_square, DEFAULT_PROMOTION)
        values.append(full_minimax(child, depth - 1, not maximizing, color))
    return max(values) if maximizing else min(values)


def full_root(position, color, depth):
    """Root scores of every move, in generation order."""
    scored = []
    for move in legal_moves(position, color):
        child = position.copy()
        child.relocate(move.from_square, move.to_square, DEFAULT_PROMOTION)
        scored.append((move, full_minimax(child, depth - 1, False, color)))
    return scored


class TestChooseMove:
    def test_no_legal_move_returns_none(self):
        assert choose_move(Position.from_fen(FOOLS_MATE), Color.WHITE, 2) is None
        assert choose_move(Position.from_fen(STALEMATE), Color.BLACK, 2) is None

    def test_rejects_depth_below_one(self, initial):
        with pytest.raises(ValueError):
            search(initial, Color.WHITE, 0)

    def test_takes_a_hanging_queen(self):
        position = Position.from_fen("7k/8/8/3q4/8/8/8/K2R4")
        assert choose_move(position, Color.WHITE, 1) == Move.parse("d1", "d5")

    def test_finds_mate_in_one(self):
        position = Position.from_fen(BACK_RANK)
        result = search(position, Color.WHITE, 2)
        assert result.move == Move.parse("a1", "a8")
        assert result.score == TERMINAL_SCORE

    def test_black_to_move(self):
        position = Position.from_fen("k2r4/8/8/8/3Q4/8/8/7K")
        assert choose_move(position, Color.BLACK, 1) == Move.parse("d8", "d4")

    def test_promotes(self):
        position = Position.from_fen(PROMOTION)
        assert choose_move(position, Color.WHITE, 1) == Move.parse("a7", "a8")

    def test_position_is_not_modified(self):
        position = Position.from_fen(PAWN_ENDING)
        before = position.copy()
        search(position, Color.WHITE, 2)
        assert position == before

    def test_initial_position_depth_one(self, initial):
        move = choose_move(initial, Color.WHITE, 1)
        assert move in legal_moves(initial, Color.WHITE)


class TestAlphaBeta:
    @pytest.mark.parametrize(
        "fen, color, depth",
        [
            (PAWN_ENDING, Color.WHITE, 2),
            (BACK_RANK, Color.WHITE, 2),
            ("7k/8/8/3q4/8/8/8/K2R4", Color.WHITE, 2),
            ("k2r4/8/8/8/3Q4/8/8/7K", Color.BLACK, 2),
            # Three plies put a max node under a min node, so beta cut-offs happen.
            ("4k3/8/8/8/8/2n5/8/R3K3", Color.WHITE, 3),
            ("7k/8/8/3q4/8/8/8/K2R4", Color.WHITE, 3),
        ],
    )
    def test_matches_full_minimax(self, fen, color, depth):
        position = Position.from_fen(fen)
        scored = full_root(position, color, depth)
        best_score = max(score for _, score in scored)
        best_move = next(move for move, score in scored if score == best_score)

        result = search(position, color, depth)
        assert result.move == best_move
        assert result.score == best_score

    @pytest.mark.parametrize(
        "fen, move, score",
        [
            ("4k3/8/8/8/8/2n5/8/R3K3", ("a1", "a7"), 280),
            ("7k/8/8/3q4/8/8/8/K2R4", ("d1", "d5"), 640),
        ],
    )
    def test_depth_three_results(self, fen, move, score):
        result = search(Position.from_fen(fen), Color.WHITE, 3)
        assert result.move == Move.parse(*move)
        assert result.score == score

    def test_max_node_fails_high_against_low_beta(self):
        position = Position.from_fen("7k/8/8/3q4/8/8/8/K2R4")
        exact = minimax(position, 2, -10**6, 10**6, True, SearchState(color=Color.WHITE))
        narrow = SearchState(color=Color.WHITE)
        value = minimax(position, 2, -10**6, exact - 1, True, narrow)
        assert value >= exact - 1
        full = SearchState(color=Color.WHITE)
        minimax(position, 2, -10**6, 10**6, True, full)
        assert narrow.node_count < full.node_count

    def test_prunes(self):
        position = Position.from_fen(BACK_RANK)
        pruned = SearchState(color=Color.WHITE)
        unpruned = SearchState(color=Color.WHITE)
        value = minimax(position, 2, -10**6, 10**6, True, pruned)
        assert value == full_minimax(position, 2, True, Color.WHITE)

        # Nodes a sweep without cut-offs visits.
        def count_full(pos, depth, maximizing):
            unpruned.node_count += 1
            if depth == 0:
                return
            side = Color.WHITE if maximizing else Color.BLACK
            for move in legal_moves(pos, side):
                child = pos.copy()
                child.relocate(move.from_square, move.to_square)
                count_full(child, depth - 1, not maximizing)

        count_full(position, 2, True)
        assert pruned.node_count < unpruned.node_count

    def test_terminal_scores(self):
        mated = Position.from_fen(FOOLS_MATE)
        assert minimax(mated, 2, -10**6, 10**6, True, SearchState(color=Color.WHITE)) == -TERMINAL_SCORE
        assert minimax(mated, 2, -10**6, 10**6, False, SearchState(color=Color.BLACK)) == TERMINAL_SCORE


class TestCancellation:
    def test_cancelled_minimax_value_is_flagged_by_the_event(self):
        # A mated side scores -TERMINAL_SCORE normally; a stopped search gives
        # back a placeholder that only the event distinguishes.
        state = SearchState(color=Color.WHITE)
        state.stop_event.set()
        value = minimax(Position.from_fen(FOOLS_MATE), 2, -10**6, 10**6, True, state)
        assert value == 0
        assert state.stop_event.is_set()

    def test_preset_stop_event_returns_first_move(self):
        position = Position.from_fen(PAWN_ENDING)
        stop = threading.Event()
        stop.set()
        result = search(position, Color.WHITE, 2, stop_event=stop)
        assert result.move == legal_moves(position, Color.WHITE)[0]
        assert result.score is None

    def test_exhausted_time_budget(self):
        position = Position.from_fen(PAWN_ENDING)
        result = search(position, Color.WHITE, 2, time_limit_ms=0)
        assert result.move is not None
        assert result.score is None

    def test_state_sets_event_when_out_of_time(self):
        state = SearchState(color=Color.WHITE, time_limit_ms=0)
        assert state.should_stop()
        assert state.stop_event.is_set()
