#!/usr/bin/env python3
"""
Benchmark: measure nodes visited and time per move at a fixed search depth.

Run before and after a change to the search or the evaluator to quantify
it. A lower node count at the same depth means more effective pruning; a
higher NPS means cheaper node processing (mostly the mobility term of the
evaluation, which runs the legality test for every piece and square).

Usage: python3 tools/bench.py [depth]
"""
import os
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from engine.board import Color, Position
from engine.search import search

# Fixed positions spanning opening, middlegame, and endgame. Same positions
# for every comparison; placement only, plus the side to move.
POSITIONS = [
    ("Start",        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR", Color.WHITE),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR", Color.BLACK),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R", Color.BLACK),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R", Color.WHITE),
    ("Queen ending", "6k1/ppp2ppp/8/3p4/3P4/8/PPP2PPP/6K1", Color.WHITE),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8", Color.WHITE),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8", Color.WHITE),
]


def run_position(label: str, fen: str, color: Color, depth: int) -> dict:
    """Search one position and return its metrics.

    Args:
        label: Human-readable position name for display.
        fen:   FEN piece placement.
        color: Side to move.
        depth: Search depth in plies.

    Returns:
        Dict with keys: label, move, depth, score, nodes, nps, time_ms.
    """
    position = Position.from_fen(fen)
    start = time.monotonic()
    result = search(position, color, depth)
    time_ms = max(1, int((time.monotonic() - start) * 1000))
    return {
        "label": label,
        "move": str(result.move) if result.move is not None else "(none)",
        "depth": result.depth,
        "score": result.score if result.score is not None else 0,
        "nodes": result.nodes,
        "nps": result.nodes * 1000 // time_ms,
        "time_ms": time_ms,
    }


def main(argv: list[str] | None = None) -> None:
    """Run all benchmark positions and print a summary table."""
    argv = sys.argv[1:] if argv is None else argv
    depth = int(argv[0]) if argv else 2

    print(f"Alpha-beta chess benchmark — {sys.executable}")
    print(f"Depth: {depth}")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Depth':>5} {'Score':>6} "
        f"{'Nodes':>8} {'NPS':>8} {'Time(ms)':>9}"
    )
    print("-" * 68)

    results = []
    for label, fen, color in POSITIONS:
        r = run_position(label, fen, color, depth)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<7} {r['depth']:>5} {r['score']:>6} "
            f"{r['nodes']:>8,} {r['nps']:>8,} {r['time_ms']:>9,}"
        )

    valid = [r for r in results if r["nodes"] > 0]
    if valid:
        avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
        avg_time = sum(r["time_ms"] for r in valid) // len(valid)
        avg_nps = sum(r["nps"] for r in valid) // len(valid)
        print("-" * 68)
        print(
            f"{'AVERAGE':<14} {'':<7} {'':<5} {'':<6} "
            f"{avg_nodes:>8,} {avg_nps:>8,} {avg_time:>9,}"
        )


if __name__ == "__main__":
    main()
