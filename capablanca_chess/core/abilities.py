from __future__ import annotations

from typing import Iterable, Iterator, Tuple, TYPE_CHECKING

from .moves import Move
from .piece import PieceKind

if TYPE_CHECKING:
    from .board import Board
    from .piece import Piece
    from .types import Coordinate

# deltas
ORTH = ((1,0),(-1,0),(0,1),(0,-1))
DIAG = ((1,1),(1,-1),(-1,1),(-1,-1))
KNIGHT_DELTAS = ((1,2),(2,1),(2,-1),(1,-2),(-1,-2),(-2,-1),(-2,1),(-1,2))
KING8 = ORTH + DIAG

class Ability:
    """One movement component of a piece kind."""

    def generate_moves(self, piece: "Piece", board: "Board") -> Iterator[Move]:
        return iter(())

    def generate_attacks(self, piece: "Piece", board: "Board") -> Iterator["Coordinate"]:
        return iter(())

class StepAbility(Ability):
    """Fixed offsets: knight jumps, king steps."""

    def __init__(self, deltas: Iterable[Tuple[int,int]]):
        self.deltas = tuple(deltas)

    def generate_moves(self, piece, board):
        me = piece.snapshot()
        for df, dr in self.deltas:
            to = piece.pos.offset(df, dr)
            if not to.is_valid():
                continue
            target = board.piece_at(to)
            if target is None:
                yield Move.step(me, to)
            elif target.color is not piece.color:
                yield Move.step(me, to, target.snapshot())

    def generate_attacks(self, piece, board):
        for df, dr in self.deltas:
            to = piece.pos.offset(df, dr)
            if to.is_valid():
                yield to

class SlideAbility(Ability):
    def __init__(self, deltas: Iterable[Tuple[int,int]]):
        self.deltas = tuple(deltas)

    def generate_moves(self, piece, board):
        me = piece.snapshot()
        for df, dr in self.deltas:
            to = piece.pos.offset(df, dr)
            while to.is_valid():
                target = board.piece_at(to)
                if target is None:
                    yield Move.step(me, to)
                else:
                    if target.color is not piece.color:
                        yield Move.step(me, to, target.snapshot())
                    break
                to = to.offset(df, dr)

    def generate_attacks(self, piece, board):
        for df, dr in self.deltas:
            to = piece.pos.offset(df, dr)
            while to.is_valid():
                yield to
                if board.piece_at(to) is not None:
                    break
                to = to.offset(df, dr)

class PawnAbility(Ability):
    """Pushes and diagonal captures. En passant lives in special.py."""

    def generate_moves(self, piece, board):
        me = piece.snapshot()
        direction = piece.color.forward
        last_rank = piece.color.promotion_rank

        one = piece.pos.offset(0, direction)
        if one.is_valid() and board.is_empty(one):
            if one.rank == last_rank:
                yield Move.promotion_move(me, one, PieceKind.QUEEN)
            else:
                yield Move.step(me, one)

            if not piece.has_moved and piece.pos.rank == piece.color.pawn_rank:
                two = piece.pos.offset(0, 2 * direction)
                if two.is_valid() and board.is_empty(two):
                    yield Move.step(me, two)

        for df in (-1, 1):
            to = piece.pos.offset(df, direction)
            if not to.is_valid():
                continue
            if board.is_enemy(to, piece.color):
                target = board.piece_at(to)
                if to.rank == last_rank:
                    yield Move.promotion_move(me, to, PieceKind.QUEEN, target.snapshot())
                else:
                    yield Move.step(me, to, target.snapshot())

    def generate_attacks(self, piece, board):
        direction = piece.color.forward
        for df in (-1, 1):
            to = piece.pos.offset(df, direction)
            if to.is_valid():
                yield to
