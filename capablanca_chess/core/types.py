from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .errors import InvalidCoordinateError

class Color(Enum):
    WHITE = 1
    BLACK = -1

    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Rank delta of a pawn step."""
        return self.value

    @property
    def home_rank(self) -> int:
        return 0 if self is Color.WHITE else 7

    @property
    def pawn_rank(self) -> int:
        return 1 if self is Color.WHITE else 6

    @property
    def promotion_rank(self) -> int:
        return 7 if self is Color.WHITE else 0

FILES = "abcdefghij"
NUM_FILES = 10
NUM_RANKS = 8

def in_bounds(file: int, rank: int) -> bool:
    return 0 <= file < NUM_FILES and 0 <= rank < NUM_RANKS

@dataclass(frozen=True, order=True)
class Coordinate:
    file: int
    rank: int

    def is_valid(self) -> bool:
        return in_bounds(self.file, self.rank)

    def offset(self, df: int, dr: int) -> "Coordinate":
        return Coordinate(self.file + df, self.rank + dr)

    def to_algebraic(self) -> str:
        if not self.is_valid():
            raise InvalidCoordinateError(f"Off-board coordinate: ({self.file}, {self.rank})")
        return f"{FILES[self.file]}{self.rank + 1}"

    @classmethod
    def from_algebraic(cls, text: str) -> "Coordinate":
        a = text.strip().lower() if isinstance(text, str) else ""
        if len(a) != 2 or a[0] not in FILES or a[1] not in "12345678":
            raise InvalidCoordinateError(f"Bad square: {text!r}")
        c = cls(FILES.index(a[0]), int(a[1]) - 1)
        if not c.is_valid():
            raise InvalidCoordinateError(f"Bad square: {text!r}")
        return c

    def __str__(self) -> str:
        if self.is_valid():
            return self.to_algebraic()
        return f"({self.file},{self.rank})"

def sq(file: int, rank: int) -> Coordinate:
    return Coordinate(file, rank)

def parse_square(text: str) -> Coordinate:
    return Coordinate.from_algebraic(text)

def sq_name(c: Coordinate) -> str:
    return c.to_algebraic()

def require_valid(c: Coordinate) -> Coordinate:
    if not isinstance(c, Coordinate) or not c.is_valid():
        raise InvalidCoordinateError(f"Off-board coordinate: {c!r}")
    return c

def all_coordinates() -> Iterator[Coordinate]:
    # file-major: a1, a2, ..., a8, b1, ...
    for f in range(NUM_FILES):
        for r in range(NUM_RANKS):
            yield Coordinate(f, r)
