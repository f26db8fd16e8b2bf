from __future__ import annotations


class ChessRulesError(Exception):
    """Base class for rules-engine failures."""


class InvalidCoordinateError(ChessRulesError, ValueError):
    """A coordinate outside the 10x8 board, or malformed algebraic text."""


class IllegalMoveError(ChessRulesError, ValueError):
    """A move that is not in the current legal set (checked entry points only)."""


class BoardInvariantError(ChessRulesError, RuntimeError):
    """Structural corruption: missing king, castling without rook squares, etc."""
