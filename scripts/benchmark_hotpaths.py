#!/usr/bin/env python3
"""Time perft and legal-move generation from the starting position."""
from __future__ import annotations

import argparse
import time

from capablanca_chess.core import Game
from capablanca_chess.perft import perft


def _timed(fn, repeat: int) -> tuple[int, float]:
    count = 0
    start = time.perf_counter()
    for _ in range(repeat):
        count += fn()
    return count, time.perf_counter() - start


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--perft-depth", type=int, default=2)
    parser.add_argument("--repeat", type=int, default=3)
    args = parser.parse_args()

    game = Game.standard()
    nodes, secs = _timed(lambda: perft(game, args.perft_depth), args.repeat)
    print(f"perft({args.perft_depth}) x{args.repeat}: {nodes} nodes in {secs:.3f}s "
          f"({nodes / secs if secs else 0.0:.0f} nodes/s)")

    moves, secs = _timed(lambda: len(game.legal_moves()), args.repeat * 100)
    print(f"legal_moves x{args.repeat * 100}: {moves} moves in {secs:.3f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
