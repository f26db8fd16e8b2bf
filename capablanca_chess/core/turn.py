from __future__ import annotations

from dataclasses import dataclass

from .types import Color

FIFTY_MOVE_HALFMOVES = 100

@dataclass
class TurnTracker:
    side_to_move: Color = Color.WHITE
    fullmove_number: int = 1
    halfmove_clock: int = 0
    ply: int = 0

    def advance(self) -> None:
        # Fullmove increments after Black has played
        if self.side_to_move is Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opponent()
        self.ply += 1

    def record_halfmove(self, resets: bool) -> None:
        if resets:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

    def fifty_move_draw(self) -> bool:
        return self.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    def reset(self) -> None:
        self.side_to_move = Color.WHITE
        self.fullmove_number = 1
        self.halfmove_clock = 0
        self.ply = 0

    def copy(self) -> "TurnTracker":
        return TurnTracker(self.side_to_move, self.fullmove_number, self.halfmove_clock, self.ply)

    def __str__(self) -> str:
        return (f"Turn {self.fullmove_number}, {self.side_to_move.name.title()} to move "
                f"(half-move clock: {self.halfmove_clock})")
