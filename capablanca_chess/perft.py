from __future__ import annotations

from typing import Dict

from .core import Game
from .notation import move_to_text


def perft(game: Game, depth: int) -> int:
    """Performance test: count leaf nodes to `depth` from current game state.

    Each child position is played on a copy, so the game passed in is never
    touched and no history is recorded.
    """
    if depth <= 0:
        return 1
    moves = game.legal_moves(game.side_to_move)
    if depth == 1:
        return len(moves)
    total = 0
    for m in moves:
        child = game.copy()
        child.executor.execute(m)
        total += perft(child, depth - 1)
    return total


def perft_divide(game: Game, depth: int) -> Dict[str, int]:
    """Divide perft: nodes per root move."""
    out: Dict[str, int] = {}
    for m in game.legal_moves(game.side_to_move):
        child = game.copy()
        child.executor.execute(m)
        out[move_to_text(m)] = perft(child, depth - 1)
    return out
