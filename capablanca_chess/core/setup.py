from __future__ import annotations

from .board import Board, CastlingRights
from .piece import Piece, PieceKind
from .types import Color, FILES, NUM_FILES, NUM_RANKS, sq

# R N A B Q K B C N R on files a..j
BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.ARCHBISHOP,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.CHANCELLOR,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

def setup_capablanca(board: Board) -> None:
    board.clear()
    for color in (Color.WHITE, Color.BLACK):
        for f, kind in enumerate(BACK_RANK):
            board.add_piece(Piece(kind, color, sq(f, color.home_rank)))
        for f in range(NUM_FILES):
            board.add_piece(Piece(PieceKind.PAWN, color, sq(f, color.pawn_rank)))
    board.castling = CastlingRights()
    board.en_passant_target = None

def ascii_board(board: Board, coordinates: bool = False) -> str:
    rows = []
    for r in range(NUM_RANKS - 1, -1, -1):
        row = []
        for f in range(NUM_FILES):
            p = board.piece_at(sq(f, r))
            row.append(p.symbol if p else ".")
        line = " ".join(row)
        rows.append(f"{r + 1} {line}" if coordinates else line)
    if coordinates:
        rows.append("  " + " ".join(FILES))
    return "\n".join(rows)
