from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
import logging
import threading
from typing import Iterator, List, Optional, Union

from .board import Board
from .errors import IllegalMoveError
from .executor import MoveExecutor, MoveResult
from .generator import MoveGenerator
from .history import MoveHistory
from .moves import Move
from .setup import setup_capablanca
from .turn import TurnTracker
from .types import Color, Coordinate

LOGGER = logging.getLogger("capablanca.core.game")

class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_FIFTY_MOVE = "draw_fifty_move"

    @property
    def is_over(self) -> bool:
        return self is not GameStatus.IN_PROGRESS

class Game:
    """Board + generator + executor + clocks + history behind one lock.

    The lock is re-entrant and held for every public call, so no other thread
    can read the board while a legality probe has it half-moved.
    """

    def __init__(self, board: Optional[Board] = None, turns: Optional[TurnTracker] = None) -> None:
        self.board = board if board is not None else Board()
        self.turns = turns if turns is not None else TurnTracker()
        self.generator = MoveGenerator(self.board)
        self.executor = MoveExecutor(self.board, self.turns)
        self.history = MoveHistory()
        self._lock = threading.RLock()

    @classmethod
    def standard(cls) -> "Game":
        g = cls()
        setup_capablanca(g.board)
        return g

    def new_game(self) -> None:
        with self._lock:
            setup_capablanca(self.board)
            self.turns.reset()
            self.history.clear()
            LOGGER.debug("new_game")

    # --- clocks ---
    @property
    def side_to_move(self) -> Color:
        return self.turns.side_to_move

    @property
    def halfmove_clock(self) -> int:
        return self.turns.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self.turns.fullmove_number

    # --- queries ---
    def legal_moves(self, where: Union[Color, Coordinate, None] = None) -> List[Move]:
        with self._lock:
            if where is None:
                where = self.turns.side_to_move
            if isinstance(where, Color):
                return self.generator.all_legal(where)
            if isinstance(where, Coordinate):
                return self.generator.legal_moves_at(where)
            raise TypeError(f"Expected Color or Coordinate, got {type(where).__name__}")

    def pseudo_legal_moves(self, c: Coordinate) -> List[Move]:
        with self._lock:
            piece = self.board.piece_at(c)
            return [] if piece is None else self.generator.pseudo_legal(piece)

    def is_square_attacked(self, c: Coordinate, by_color: Color) -> bool:
        with self._lock:
            return self.generator.attacks(c, by_color)

    def in_check(self, color: Optional[Color] = None) -> bool:
        with self._lock:
            return self.generator.in_check(color or self.turns.side_to_move)

    def has_legal_moves(self, color: Optional[Color] = None) -> bool:
        with self._lock:
            return self.generator.has_legal(color or self.turns.side_to_move)

    def is_checkmate(self) -> bool:
        with self._lock:
            return self.in_check() and not self.has_legal_moves()

    def is_stalemate(self) -> bool:
        with self._lock:
            return not self.in_check() and not self.has_legal_moves()

    def is_fifty_move_draw(self) -> bool:
        return self.turns.fifty_move_draw()

    def status(self) -> GameStatus:
        with self._lock:
            if not self.has_legal_moves():
                return GameStatus.CHECKMATE if self.in_check() else GameStatus.STALEMATE
            if self.turns.fifty_move_draw():
                return GameStatus.DRAW_FIFTY_MOVE
            return GameStatus.IN_PROGRESS

    def winner(self) -> Optional[Color]:
        with self._lock:
            if self.status() is GameStatus.CHECKMATE:
                return self.turns.side_to_move.opponent()
            return None

    # --- mutation ---
    def play(self, move: Move) -> MoveResult:
        """Checked entry point: reject anything outside the current legal set."""
        with self._lock:
            status = self.status()
            if status.is_over:
                raise IllegalMoveError(f"Game is over: {status.value}")
            mover = self.board.piece_at(move.from_sq)
            if mover is None or mover.color is not self.turns.side_to_move:
                raise IllegalMoveError(f"Illegal move: {move} (wrong side to move)")
            legal = self.generator.legal(mover)
            for candidate in legal:
                if candidate == move:
                    return self._execute(candidate)
            raise IllegalMoveError(f"Illegal move: {move}")

    def execute(self, move: Move) -> MoveResult:
        """Apply a move already known to be legal; not re-validated."""
        with self._lock:
            return self._execute(move)

    def _execute(self, move: Move) -> MoveResult:
        from ..san import to_san  # lazy import
        self.executor.validate(move)
        san = to_san(self, move)
        result = self.executor.execute(move)
        self.history.append(result, san)
        LOGGER.debug("move_played", extra={"san": san, "ply": self.turns.ply})
        return result

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the game lock across several calls."""
        with self._lock:
            yield

    def copy(self) -> "Game":
        with self._lock:
            return Game(self.board.copy(), self.turns.copy())
