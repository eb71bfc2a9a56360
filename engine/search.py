"""
Search entry point: fixed-depth minimax with alpha-beta pruning.

choose_move() is the stable interface used by the console loop, the web API
and the benchmark. It searches a fixed number of plies (DEFAULT_DEPTH = 3);
there is no iterative deepening, no transposition table, and no move ordering
beyond the generation order of engine.rules.legal_moves().

Tree shape:
    The engine plays `color`. Nodes where `color` is to move are maximizing,
    nodes where the opponent is to move are minimizing. Leaves are scored with
    evaluate(position, color). A node whose side to move has no legal move is
    terminal and scores -TERMINAL_SCORE when it is the engine's turn and
    +TERMINAL_SCORE otherwise; checkmate and stalemate are not told apart and
    the score does not depend on how deep the node is.

Pruning:
    alpha is the best score the maximizer is already guaranteed, beta the best
    the minimizer is. A maximizing node stops searching siblings once its
    running maximum reaches beta; a minimizing node stops once its running
    minimum falls to alpha. Bounds tighten as siblings finish. The root picks
    the first move with the strictly greatest score, which is the same move a
    full minimax sweep picks.

Snapshots:
    Every child is searched on its own Position.copy(). Branches never share
    a mutable position, which is why no make/unmake bookkeeping exists.

Cancellation:
    A threading.Event and/or a time budget can stop the search early. Both are
    consulted on entry to every internal node; a stopped search unwinds
    immediately and choose_move() returns the best root move whose subtree was
    searched completely (or the first legal move if none was).
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import NamedTuple

from engine.board import Color, Position
from engine.constants import DEFAULT_DEPTH, DEFAULT_PROMOTION, INFINITY, TERMINAL_SCORE
from engine.evaluate import evaluate
from engine.rules import Move, legal_moves

_log = logging.getLogger(__name__)


@dataclass
class SearchState:
    """
    Mutable state for one search call.

    Attributes:
        color:         The side the engine plays; fixes which nodes maximize
                       and whose perspective leaves are scored from.
        stop_event:    Set by another thread (or by the time check below) to
                       abort the search.
        time_limit_ms: Budget in milliseconds; infinite by default.
        node_count:    Nodes visited, leaves included.
        start_time:    Monotonic clock reading when the search began.
    """

    color: Color
    stop_event: threading.Event = field(default_factory=threading.Event)
    time_limit_ms: float = float("inf")
    node_count: int = 0
    start_time: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.start_time) * 1000

    def should_stop(self) -> bool:
        """True once cancelled or out of time. Running out of time sets stop_event."""
        if self.stop_event.is_set():
            return True
        if self.elapsed_ms() >= self.time_limit_ms:
            self.stop_event.set()
            return True
        return False


class SearchResult(NamedTuple):
    """
    Outcome of search().

    move is None only when the engine has no legal move at all. score is the
    minimax value of `move`, or None when the search was stopped before any
    root move was fully searched.
    """

    move: Move | None
    score: int | None
    depth: int
    nodes: int


def _play(position: Position, move: Move) -> Position:
    child = position.copy()
    child.relocate(move.from_square, move.to_square, DEFAULT_PROMOTION)
    return child


def minimax(
    position: Position,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    state: SearchState,
) -> int:
    """
    Alpha-beta minimax value of `position`.

    Args:
        position:   Position to search. Not modified.
        depth:      Remaining plies; 0 means score the position statically.
        alpha:      Score the maximizer can already force elsewhere.
        beta:       Score the minimizer can already force elsewhere.
        maximizing: True when state.color is to move.
        state:      Per-search state (engine colour, counters, cancellation).

    Returns:
        Score from state.color's perspective. When the value falls outside
        (alpha, beta) it is only a bound, which is all the caller needs.
        Once state.stop_event is set the returned 0 is not a score: callers
        must check the event before comparing the value, as search() does.
    """
    state.node_count += 1

    if depth == 0:
        return evaluate(position, state.color)

    if state.should_stop():
        return 0

    side = state.color if maximizing else state.color.opponent
    moves = legal_moves(position, side)
    if not moves:
        return -TERMINAL_SCORE if maximizing else TERMINAL_SCORE

    if maximizing:
        best = -INFINITY
        for move in moves:
            value = minimax(_play(position, move), depth - 1, alpha, beta, False, state)
            if state.stop_event.is_set():
                return 0
            best = max(best, value)
            if best >= beta:
                break
            alpha = max(alpha, best)
        return best

    best = INFINITY
    for move in moves:
        value = minimax(_play(position, move), depth - 1, alpha, beta, True, state)
        if state.stop_event.is_set():
            return 0
        best = min(best, value)
        if best <= alpha:
            break
        beta = min(beta, best)
    return best


def search(
    position: Position,
    color: Color,
    depth: int = DEFAULT_DEPTH,
    stop_event: threading.Event | None = None,
    time_limit_ms: float | None = None,
) -> SearchResult:
    """
    Pick a move for `color` and report the search statistics.

    Args:
        position:      The current position. Not modified.
        color:         Side to move, and the side the engine plays.
        depth:         Plies to search, at least 1.
        stop_event:    Optional cancellation event shared with the caller.
        time_limit_ms: Optional time budget in milliseconds.

    Returns:
        SearchResult(move, score, depth, nodes).

    Raises:
        ValueError: depth is smaller than 1.
    """
    if depth < 1:
        raise ValueError(f"search depth must be at least 1, got {depth}")

    state = SearchState(
        color=color,
        stop_event=stop_event if stop_event is not None else threading.Event(),
        time_limit_ms=float(time_limit_ms) if time_limit_ms is not None else float("inf"),
    )

    moves = legal_moves(position, color)
    if not moves:
        return SearchResult(None, None, depth, 0)

    best_move: Move | None = None
    best_score = -INFINITY
    alpha = -INFINITY

    for move in moves:
        score = minimax(_play(position, move), depth - 1, alpha, INFINITY, False, state)
        if state.stop_event.is_set():
            # This subtree was cut short; its score cannot be trusted.
            break
        if score > best_score:
            best_score = score
            best_move = move
        alpha = max(alpha, best_score)

    if best_move is None:
        _log.info("search stopped before any move finished; playing %s", moves[0])
        return SearchResult(moves[0], None, depth, state.node_count)

    _log.debug(
        "%s depth=%d move=%s score=%d nodes=%d time=%.0fms",
        color,
        depth,
        best_move,
        best_score,
        state.node_count,
        state.elapsed_ms(),
    )
    return SearchResult(best_move, best_score, depth, state.node_count)


def choose_move(
    position: Position,
    color: Color,
    depth: int = DEFAULT_DEPTH,
    stop_event: threading.Event | None = None,
    time_limit_ms: float | None = None,
) -> Move | None:
    """
    Best move for `color`, or None if it has no legal move.

    None means the game is over for `color` (checkmate or stalemate); callers
    should consult engine.status to tell which.
    """
    return search(position, color, depth, stop_event, time_limit_ms).move
