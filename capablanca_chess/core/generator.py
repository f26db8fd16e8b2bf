from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from .board import Board
from .errors import BoardInvariantError
from .moves import Move
from .piece import Piece, PieceKind
from .rules import attacked_squares, pseudo_legal_moves
from .special import castling_moves, en_passant_moves, expand_promotions
from .types import Color, Coordinate, require_valid

class MoveGenerator:
    """Pseudo-legal generation, attack detection and the king-safety filter."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self._probing = False

    def pseudo_legal(self, piece: Piece) -> List[Move]:
        return pseudo_legal_moves(piece, self.board)

    def attacks(self, target: Coordinate, by_color: Color) -> bool:
        require_valid(target)
        for p in self.board.pieces(by_color):
            for a in attacked_squares(p, self.board):
                if a == target:
                    return True
        return False

    def in_check(self, color: Color) -> bool:
        return self.attacks(self.board.king_square(color), color.opponent())

    def legal(self, piece: Piece) -> List[Move]:
        candidates = self.pseudo_legal(piece)
        if piece.kind is PieceKind.PAWN:
            candidates.extend(en_passant_moves(self, piece))

        # Every promotion variant of one (from, to) pair leaves the same
        # squares occupied, so probe once and fan out afterwards.
        safe = [m for m in candidates if not self._leaves_king_in_check(m, piece.color)]
        out = expand_promotions(safe)

        if piece.kind is PieceKind.KING:
            out.extend(castling_moves(self, piece))
        return out

    def legal_moves_at(self, c: Coordinate) -> List[Move]:
        piece = self.board.piece_at(c)
        if piece is None:
            return []
        return self.legal(piece)

    def all_legal(self, color: Color) -> List[Move]:
        out: List[Move] = []
        for p in self.board.pieces(color):
            out.extend(self.legal(p))
        return out

    def has_legal(self, color: Color) -> bool:
        for p in self.board.pieces(color):
            if self.legal(p):
                return True
        return False

    def _leaves_king_in_check(self, move: Move, color: Color) -> bool:
        with self._probe(move):
            return self.in_check(color)

    @contextmanager
    def _probe(self, move: Move) -> Iterator[None]:
        """Tentatively play `move` on the grid only, then put it back.

        Only the touched squares are saved: origin, destination and (for en
        passant) the captured pawn's square. Rights, en-passant target and
        clocks are never touched.
        """
        if self._probing:
            raise BoardInvariantError("Nested legality probe")
        board = self.board
        mover = board.piece_at(move.from_sq)
        if mover is None:
            raise BoardInvariantError(f"No piece on {move.from_sq}")

        touched: List[Tuple[Coordinate, Optional[Piece]]] = []
        for c in (move.from_sq, move.to_sq, move.captured_sq):
            if c is not None and all(c != t for t, _ in touched):
                touched.append((c, board.piece_at(c)))
        had_moved = mover.has_moved

        self._probing = True
        try:
            if move.captured_sq is not None and move.captured_sq != move.to_sq:
                board.set_piece(move.captured_sq, None)
            board.set_piece(move.from_sq, None)
            board.set_piece(move.to_sq, mover)
            mover.has_moved = True
            yield
        finally:
            for c, occupant in reversed(touched):
                board.set_piece(c, occupant)
            mover.has_moved = had_moved
            self._probing = False
