from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import BoardInvariantError
from .piece import Piece, PieceKind
from .types import Color, Coordinate, NUM_FILES, NUM_RANKS, all_coordinates, require_valid, sq

class CastleSide(Enum):
    KING = "king"
    QUEEN = "queen"

KING_HOME_FILE = 5
# side -> (rook home file, king destination file, rook destination file)
CASTLING_FILES: Dict[CastleSide, Tuple[int, int, int]] = {
    CastleSide.KING: (9, 8, 7),
    CastleSide.QUEEN: (0, 2, 3),
}

def king_home(color: Color) -> Coordinate:
    return sq(KING_HOME_FILE, color.home_rank)

def rook_home(color: Color, side: CastleSide) -> Coordinate:
    return sq(CASTLING_FILES[side][0], color.home_rank)

def castling_for_rook_home(c: Coordinate) -> Optional[Tuple[Color, CastleSide]]:
    for color in Color:
        for side in CastleSide:
            if rook_home(color, side) == c:
                return color, side
    return None

@dataclass(frozen=True)
class CastlingRights:
    """Four independent flags. Rights can only be taken away."""
    white_king: bool = True
    white_queen: bool = True
    black_king: bool = True
    black_queen: bool = True

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls(False, False, False, False)

    def allowed(self, color: Color, side: CastleSide) -> bool:
        return getattr(self, self._field(color, side))

    def without(self, color: Color, side: CastleSide) -> "CastlingRights":
        values = self._as_dict()
        values[self._field(color, side)] = False
        return CastlingRights(**values)

    def without_color(self, color: Color) -> "CastlingRights":
        return self.without(color, CastleSide.KING).without(color, CastleSide.QUEEN)

    def granted(self) -> List[Tuple[Color, CastleSide]]:
        return [(c, s) for c in Color for s in CastleSide if self.allowed(c, s)]

    def to_fen(self) -> str:
        out = ""
        if self.white_king:
            out += "K"
        if self.white_queen:
            out += "Q"
        if self.black_king:
            out += "k"
        if self.black_queen:
            out += "q"
        return out or "-"

    @staticmethod
    def _field(color: Color, side: CastleSide) -> str:
        return f"{color.name.lower()}_{side.value}"

    def _as_dict(self) -> Dict[str, bool]:
        return {
            "white_king": self.white_king,
            "white_queen": self.white_queen,
            "black_king": self.black_king,
            "black_queen": self.black_queen,
        }

class Board:
    def __init__(self) -> None:
        self._grid: List[List[Optional[Piece]]] = [[None] * NUM_RANKS for _ in range(NUM_FILES)]
        self._kings: Dict[Color, Optional[Coordinate]] = {Color.WHITE: None, Color.BLACK: None}
        self.castling = CastlingRights()
        self.en_passant_target: Optional[Coordinate] = None

    def piece_at(self, c: Coordinate) -> Optional[Piece]:
        require_valid(c)
        return self._grid[c.file][c.rank]

    def is_empty(self, c: Coordinate) -> bool:
        return self.piece_at(c) is None

    def is_enemy(self, c: Coordinate, color: Color) -> bool:
        p = self.piece_at(c)
        return p is not None and p.color is not color

    def set_piece(self, c: Coordinate, piece: Optional[Piece]) -> Optional[Piece]:
        """Write one cell; the only path that changes placement.

        Returns the previous occupant. Keeps piece.pos and the king cache in
        step with the grid.
        """
        require_valid(c)
        previous = self._grid[c.file][c.rank]
        self._grid[c.file][c.rank] = piece
        if previous is not None and previous is not piece and previous.kind is PieceKind.KING:
            if self._kings[previous.color] == c:
                self._kings[previous.color] = None
        if piece is not None:
            piece.pos = c
            if piece.kind is PieceKind.KING:
                self._kings[piece.color] = c
        return previous

    def add_piece(self, p: Piece) -> None:
        if self.piece_at(p.pos) is not None:
            raise ValueError(f"Square {p.pos} occupied")
        self.set_piece(p.pos, p)

    def remove_piece(self, c: Coordinate) -> Optional[Piece]:
        return self.set_piece(c, None)

    def move_piece(self, from_sq: Coordinate, to_sq: Coordinate) -> Optional[Piece]:
        p = self.piece_at(from_sq)
        if p is None:
            raise BoardInvariantError(f"No piece on {from_sq}")
        require_valid(to_sq)
        self.set_piece(from_sq, None)
        return self.set_piece(to_sq, p)

    def king_square(self, color: Color) -> Coordinate:
        c = self._kings[color]
        if c is None:
            raise BoardInvariantError(f"No {color.name.lower()} king on the board")
        return c

    def find_king(self, color: Color) -> Coordinate:
        for p in self.iter_pieces(color):
            if p.kind is PieceKind.KING:
                return p.pos
        raise BoardInvariantError(f"No {color.name.lower()} king on the board")

    def iter_pieces(self, color: Optional[Color] = None) -> Iterator[Piece]:
        for c in all_coordinates():
            p = self._grid[c.file][c.rank]
            if p is not None and (color is None or p.color is color):
                yield p

    def pieces(self, color: Optional[Color] = None) -> List[Piece]:
        return list(self.iter_pieces(color))

    def clear(self) -> None:
        for c in all_coordinates():
            self.set_piece(c, None)
        self.castling = CastlingRights()
        self.en_passant_target = None

    def copy(self) -> "Board":
        b = Board()
        for p in self.iter_pieces():
            b.set_piece(p.pos, p.clone())
        b.castling = self.castling
        b.en_passant_target = self.en_passant_target
        return b
