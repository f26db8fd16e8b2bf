from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional, Tuple

from .board import Board, CastleSide, CastlingRights, castling_for_rook_home, rook_home
from .errors import BoardInvariantError
from .moves import Move
from .piece import PROMOTION_KINDS, Piece, PieceKind, PieceSnapshot
from .turn import TurnTracker
from .types import Color, Coordinate, require_valid

LOGGER = logging.getLogger("capablanca.core.executor")

@dataclass(frozen=True)
class MoveResult:
    """Everything a listener needs about one executed move."""
    move: Move
    mover: PieceSnapshot
    captured: Optional[PieceSnapshot]
    captured_at: Optional[Coordinate]
    promoted: Optional[PieceSnapshot]
    en_passant_target: Optional[Coordinate]
    castling_before: CastlingRights
    castling_after: CastlingRights
    halfmove_clock: int
    fullmove_number: int
    side_to_move: Color
    board: Board = field(repr=False, compare=False)

    @property
    def castling_revoked(self) -> Tuple[Tuple[Color, CastleSide], ...]:
        after = set(self.castling_after.granted())
        return tuple(r for r in self.castling_before.granted() if r not in after)

class MoveExecutor:
    def __init__(self, board: Board, turns: TurnTracker) -> None:
        self.board = board
        self.turns = turns

    def execute(self, move: Move) -> MoveResult:
        """Apply one move. Legality is the caller's job; structure is checked here.

        All structural checks happen before the first write, so a rejected
        move leaves the board untouched.
        """
        board = self.board
        mover, captured, rook = self._resolve(move)

        mover_before = mover.snapshot()
        captured_snap = captured.snapshot() if captured is not None else None
        capture_sq = captured.pos if captured is not None else None
        rights_before = board.castling

        # (1) captures
        if capture_sq is not None:
            board.remove_piece(capture_sq)

        # (2) placement
        promoted: Optional[Piece] = None
        board.set_piece(move.from_sq, None)
        if move.is_promotion:
            promoted = Piece(move.promotion, mover.color, move.to_sq, has_moved=True)
            board.set_piece(move.to_sq, promoted)
        else:
            board.set_piece(move.to_sq, mover)
            mover.has_moved = True
        if rook is not None:
            board.move_piece(move.rook_from, move.rook_to)
            rook.has_moved = True

        # (3) castling rights
        board.castling = self._updated_rights(rights_before, mover_before, move, capture_sq)
        if board.castling != rights_before:
            LOGGER.debug("castling_rights_revoked", extra={"before": rights_before.to_fen(),
                                                           "after": board.castling.to_fen()})

        # (4) en passant window
        board.en_passant_target = None
        if mover_before.kind is PieceKind.PAWN and abs(move.to_sq.rank - move.from_sq.rank) == 2:
            board.en_passant_target = move.from_sq.offset(0, mover_before.color.forward)

        # (5)/(6) clocks and turn
        self.turns.record_halfmove(mover_before.kind is PieceKind.PAWN or captured is not None)
        self.turns.advance()

        result = MoveResult(
            move=move,
            mover=mover_before,
            captured=captured_snap,
            captured_at=capture_sq,
            promoted=promoted.snapshot() if promoted is not None else None,
            en_passant_target=board.en_passant_target,
            castling_before=rights_before,
            castling_after=board.castling,
            halfmove_clock=self.turns.halfmove_clock,
            fullmove_number=self.turns.fullmove_number,
            side_to_move=self.turns.side_to_move,
            board=board,
        )
        LOGGER.debug("move_executed", extra={"move": str(move), "ply": self.turns.ply})
        return result

    def validate(self, move: Move) -> None:
        """Run the structural checks of `execute` without touching the board."""
        self._resolve(move)

    def _resolve(self, move: Move) -> Tuple[Piece, Optional[Piece], Optional[Piece]]:
        board = self.board
        mover = board.piece_at(move.from_sq)
        if mover is None:
            raise BoardInvariantError(f"No piece on {move.from_sq} for {move}")
        if move.mover is not None and (move.mover.uid != mover.uid):
            raise BoardInvariantError(f"Stale move {move}: mover changed on {move.from_sq}")
        require_valid(move.to_sq)

        rook: Optional[Piece] = None
        if move.is_castling:
            if move.rook_from is None or move.rook_to is None:
                raise BoardInvariantError(f"Castling move {move} has no rook squares")
            rook = board.piece_at(move.rook_from)
            if rook is None or rook.kind is not PieceKind.ROOK or rook.color is not mover.color:
                raise BoardInvariantError(f"No rook on {move.rook_from} for castling")
            occupant = board.piece_at(move.rook_to)
            if occupant is not None and occupant is not mover:
                raise BoardInvariantError(f"Rook destination {move.rook_to} is occupied")

        if move.is_promotion and move.promotion not in PROMOTION_KINDS:
            raise BoardInvariantError(f"Unrecognised promotion kind: {move.promotion!r}")

        if move.is_en_passant:
            if move.captured_sq is None:
                raise BoardInvariantError(f"En passant move {move} has no capture square")
            captured = board.piece_at(move.captured_sq)
            if captured is None:
                raise BoardInvariantError(f"No pawn to take en passant on {move.captured_sq}")
        else:
            captured = board.piece_at(move.to_sq)
            if captured is not None and (move.is_castling or captured.color is mover.color):
                raise BoardInvariantError(f"Destination {move.to_sq} holds a friendly piece")
        return mover, captured, rook

    @staticmethod
    def _updated_rights(rights: CastlingRights, mover: PieceSnapshot, move: Move,
                        capture_sq: Optional[Coordinate]) -> CastlingRights:
        if mover.kind is PieceKind.KING:
            rights = rights.without_color(mover.color)
        if mover.kind is PieceKind.ROOK:
            for side in CastleSide:
                if move.from_sq == rook_home(mover.color, side):
                    rights = rights.without(mover.color, side)
        if capture_sq is not None:
            owner = castling_for_rook_home(capture_sq)
            if owner is not None:
                rights = rights.without(*owner)
        return rights
