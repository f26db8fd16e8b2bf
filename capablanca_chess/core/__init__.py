from .errors import ChessRulesError, InvalidCoordinateError, IllegalMoveError, BoardInvariantError
from .types import Color, Coordinate, FILES, NUM_FILES, NUM_RANKS, sq, sq_name, parse_square, in_bounds, all_coordinates
from .piece import Piece, PieceKind, PieceSnapshot, PROMOTION_KINDS
from .board import Board, CastlingRights, CastleSide, CASTLING_FILES, KING_HOME_FILE, king_home, rook_home
from .moves import Move, MoveKind
from .rules import RULES, pseudo_legal_moves
from .generator import MoveGenerator
from .executor import MoveExecutor, MoveResult
from .turn import TurnTracker
from .history import MoveHistory, HistoryEntry
from .game import Game, GameStatus
from .setup import setup_capablanca, ascii_board

__all__ = [
    "ChessRulesError","InvalidCoordinateError","IllegalMoveError","BoardInvariantError",
    "Color","Coordinate","FILES","NUM_FILES","NUM_RANKS","sq","sq_name","parse_square","in_bounds","all_coordinates",
    "Piece","PieceKind","PieceSnapshot","PROMOTION_KINDS",
    "Board","CastlingRights","CastleSide","CASTLING_FILES","KING_HOME_FILE","king_home","rook_home",
    "Move","MoveKind",
    "RULES","pseudo_legal_moves",
    "MoveGenerator",
    "MoveExecutor","MoveResult",
    "TurnTracker",
    "MoveHistory","HistoryEntry",
    "Game","GameStatus",
    "setup_capablanca","ascii_board",
]
