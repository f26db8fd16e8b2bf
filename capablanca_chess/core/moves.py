from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .piece import PieceKind, PieceSnapshot
from .types import Coordinate

class MoveKind(Enum):
    NORMAL = "normal"
    CAPTURE = "capture"
    CASTLING = "castling"
    EN_PASSANT = "en_passant"
    PROMOTION = "promotion"

@dataclass(frozen=True)
class Move:
    """Immutable move descriptor.

    Equality covers (from_sq, to_sq, kind, promotion) only. Within one
    position those four fields pin down the capture as well, so a move
    resolved from text or JSON compares equal to the generated one.
    """
    from_sq: Coordinate
    to_sq: Coordinate
    kind: MoveKind = MoveKind.NORMAL
    promotion: Optional[PieceKind] = None

    mover: Optional[PieceSnapshot] = field(default=None, compare=False)
    captured: Optional[PieceSnapshot] = field(default=None, compare=False)
    captured_sq: Optional[Coordinate] = field(default=None, compare=False)
    rook_from: Optional[Coordinate] = field(default=None, compare=False)
    rook_to: Optional[Coordinate] = field(default=None, compare=False)

    @classmethod
    def step(cls, mover: PieceSnapshot, to_sq: Coordinate,
             captured: Optional[PieceSnapshot] = None) -> "Move":
        if captured is None:
            return cls(mover.pos, to_sq, MoveKind.NORMAL, mover=mover)
        return cls(mover.pos, to_sq, MoveKind.CAPTURE, mover=mover,
                   captured=captured, captured_sq=to_sq)

    @classmethod
    def promotion_move(cls, mover: PieceSnapshot, to_sq: Coordinate, promote_to: PieceKind,
                       captured: Optional[PieceSnapshot] = None) -> "Move":
        return cls(mover.pos, to_sq, MoveKind.PROMOTION, promote_to, mover=mover,
                   captured=captured, captured_sq=to_sq if captured is not None else None)

    @classmethod
    def en_passant(cls, mover: PieceSnapshot, to_sq: Coordinate, captured: PieceSnapshot) -> "Move":
        return cls(mover.pos, to_sq, MoveKind.EN_PASSANT, mover=mover,
                   captured=captured, captured_sq=captured.pos)

    @classmethod
    def castling(cls, king: PieceSnapshot, king_to: Coordinate,
                 rook_from: Coordinate, rook_to: Coordinate) -> "Move":
        return cls(king.pos, king_to, MoveKind.CASTLING, mover=king,
                   rook_from=rook_from, rook_to=rook_to)

    def with_promotion(self, kind: PieceKind) -> "Move":
        return replace(self, promotion=kind)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castling(self) -> bool:
        return self.kind is MoveKind.CASTLING

    @property
    def is_en_passant(self) -> bool:
        return self.kind is MoveKind.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.kind is MoveKind.PROMOTION

    @property
    def capture_square(self) -> Optional[Coordinate]:
        if self.captured is None:
            return None
        return self.captured_sq if self.captured_sq is not None else self.to_sq

    def __str__(self) -> str:
        s = f"{self.from_sq}-{self.to_sq}"
        if self.is_castling:
            return s + " (castling)"
        if self.is_en_passant:
            return s + " (en passant)"
        if self.is_promotion:
            promo = self.promotion.name if self.promotion is not None else "?"
            return s + f" (promotion to {promo})"
        if self.captured is not None:
            return s + f" (captures {self.captured.kind.name})"
        return s
