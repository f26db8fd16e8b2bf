"""Moves that are not a single piece's local rule.

Castling needs the rights, the rook and the opponent's attacks; en passant
needs the board's en-passant target; promotion fan-out turns one back-rank
pawn move into one candidate per promotable kind.
"""

from __future__ import annotations

from typing import Iterable, List, TYPE_CHECKING

from .board import CASTLING_FILES, CastleSide, king_home
from .moves import Move
from .piece import PROMOTION_KINDS, Piece, PieceKind
from .types import sq

if TYPE_CHECKING:
    from .generator import MoveGenerator

def castling_moves(gen: "MoveGenerator", king: Piece) -> List[Move]:
    """Castling options for an unmoved king on its home square.

    Every failed condition just omits that side. The returned moves are
    already check-safe: start, transit and destination squares are all
    verified unattacked.
    """
    board = gen.board
    if king.kind is not PieceKind.KING or king.has_moved:
        return []
    if king.pos != king_home(king.color):
        return []
    if gen.in_check(king.color):
        return []

    enemy = king.color.opponent()
    rank = king.pos.rank
    kf = king.pos.file
    out: List[Move] = []

    for side in (CastleSide.QUEEN, CastleSide.KING):
        if not board.castling.allowed(king.color, side):
            continue
        rook_file, king_to_file, rook_to_file = CASTLING_FILES[side]
        rook_sq = sq(rook_file, rank)
        rook = board.piece_at(rook_sq)
        if rook is None or rook.kind is not PieceKind.ROOK or rook.color is not king.color or rook.has_moved:
            continue

        step = 1 if rook_file > kf else -1
        if not all(board.is_empty(sq(f, rank)) for f in range(kf + step, rook_file, step)):
            continue

        path = [sq(f, rank) for f in range(kf, king_to_file + step, step)]
        if any(gen.attacks(s, enemy) for s in path):
            continue

        out.append(Move.castling(king.snapshot(), sq(king_to_file, rank), rook_sq, sq(rook_to_file, rank)))
    return out

def en_passant_moves(gen: "MoveGenerator", pawn: Piece) -> List[Move]:
    board = gen.board
    target = board.en_passant_target
    if target is None or pawn.kind is not PieceKind.PAWN:
        return []

    direction = pawn.color.forward
    if target.rank - pawn.pos.rank != direction:
        return []
    if abs(target.file - pawn.pos.file) != 1:
        return []

    victim = board.piece_at(sq(target.file, pawn.pos.rank))
    if victim is None or victim.kind is not PieceKind.PAWN or victim.color is pawn.color:
        return []
    if not board.is_empty(target):
        return []
    return [Move.en_passant(pawn.snapshot(), target, victim.snapshot())]

def expand_promotions(moves: Iterable[Move]) -> List[Move]:
    out: List[Move] = []
    for m in moves:
        if m.is_promotion:
            out.extend(m.with_promotion(kind) for kind in PROMOTION_KINDS)
        else:
            out.append(m)
    return out
