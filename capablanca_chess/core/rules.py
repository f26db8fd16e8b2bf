from __future__ import annotations

from typing import Dict, Iterator, List, Tuple, TYPE_CHECKING

from .abilities import Ability, StepAbility, SlideAbility, PawnAbility, KING8, ORTH, DIAG, KNIGHT_DELTAS
from .piece import PieceKind

if TYPE_CHECKING:
    from .board import Board
    from .moves import Move
    from .piece import Piece
    from .types import Coordinate

_KNIGHT = StepAbility(KNIGHT_DELTAS)

# Archbishop = bishop + knight, Chancellor = rook + knight.
RULES: Dict[PieceKind, Tuple[Ability, ...]] = {
    PieceKind.PAWN: (PawnAbility(),),
    PieceKind.KNIGHT: (_KNIGHT,),
    PieceKind.BISHOP: (SlideAbility(DIAG),),
    PieceKind.ROOK: (SlideAbility(ORTH),),
    PieceKind.QUEEN: (SlideAbility(KING8),),
    PieceKind.KING: (StepAbility(KING8),),
    PieceKind.ARCHBISHOP: (SlideAbility(DIAG), _KNIGHT),
    PieceKind.CHANCELLOR: (SlideAbility(ORTH), _KNIGHT),
}

_missing = [k.name for k in PieceKind if k not in RULES]
if _missing:
    raise RuntimeError(f"No movement rule for: {', '.join(_missing)}")

def pseudo_legal_moves(piece: "Piece", board: "Board") -> List["Move"]:
    out: List["Move"] = []
    for ab in RULES[piece.kind]:
        out.extend(ab.generate_moves(piece, board))
    return out

def attacked_squares(piece: "Piece", board: "Board") -> Iterator["Coordinate"]:
    for ab in RULES[piece.kind]:
        yield from ab.generate_attacks(piece, board)
