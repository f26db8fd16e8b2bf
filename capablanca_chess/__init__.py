"""Capablanca chess rules engine (10x8 board, Archbishop and Chancellor).

- core: board, pieces, move generation and execution, game status
- api: JSON-oriented facade for UIs
- formats/tools: FEN/SAN/coordinate notation/perft helpers
"""

from . import core, api
from .fen import parse_fen, game_to_fen, STARTPOS_FEN
from .notation import move_to_text, parse_move
from .perft import perft, perft_divide
from .san import to_san

__all__ = [
    "core","api",
    "parse_fen","game_to_fen","STARTPOS_FEN",
    "move_to_text","parse_move",
    "perft","perft_divide",
    "to_san",
]
