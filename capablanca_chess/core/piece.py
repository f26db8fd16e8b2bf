from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .types import Color, Coordinate

class PieceKind(Enum):
    PAWN = "P"
    KNIGHT = "N"
    BISHOP = "B"
    ROOK = "R"
    QUEEN = "Q"
    KING = "K"
    ARCHBISHOP = "A"
    CHANCELLOR = "C"

    @property
    def letter(self) -> str:
        return self.value

    @classmethod
    def from_letter(cls, ch: str) -> "PieceKind":
        kind = _BY_LETTER.get(ch.upper())
        if kind is None:
            raise ValueError(f"Unknown piece letter: {ch!r}")
        return kind

_BY_LETTER: Dict[str, PieceKind] = {k.value: k for k in PieceKind}

PROMOTION_KINDS = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ARCHBISHOP,
    PieceKind.CHANCELLOR,
)

_UID = 1

def _next_uid() -> int:
    global _UID
    uid = _UID
    _UID += 1
    return uid

@dataclass(frozen=True)
class PieceSnapshot:
    """Detached view of a piece, safe to keep after the board changes."""
    kind: PieceKind
    color: Color
    uid: int
    pos: Coordinate
    has_moved: bool

    @property
    def symbol(self) -> str:
        return self.kind.letter if self.color is Color.WHITE else self.kind.letter.lower()

@dataclass(eq=False)
class Piece:
    kind: PieceKind
    color: Color
    pos: Coordinate
    has_moved: bool = False
    uid: int = field(default_factory=_next_uid)

    @property
    def symbol(self) -> str:
        return self.kind.letter if self.color is Color.WHITE else self.kind.letter.lower()

    def snapshot(self) -> PieceSnapshot:
        return PieceSnapshot(self.kind, self.color, self.uid, self.pos, self.has_moved)

    def clone(self) -> "Piece":
        return Piece(self.kind, self.color, self.pos, self.has_moved, uid=self.uid)

    def __str__(self) -> str:
        return f"{self.color.name.title()} {self.kind.name.title()} at {self.pos}"
