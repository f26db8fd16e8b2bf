from __future__ import annotations

from typing import Optional

from .core import Game, Move, IllegalMoveError


def move_to_text(m: Move) -> str:
    """Coordinate notation: 'f2f4', promotions carry the piece letter ('b7b8a')."""
    s = f"{m.from_sq}{m.to_sq}"
    if m.is_promotion and m.promotion is not None:
        s += m.promotion.letter.lower()
    return s


def find_move(game: Game, text: str) -> Optional[Move]:
    text = text.strip().lower().replace("-", "")
    for m in game.legal_moves(game.side_to_move):
        if move_to_text(m) == text:
            return m
    return None


def parse_move(game: Game, text: str) -> Move:
    m = find_move(game, text)
    if m is None:
        raise IllegalMoveError(f"Illegal move: {text!r}")
    return m
