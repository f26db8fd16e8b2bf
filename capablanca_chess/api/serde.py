from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core import (
    Color, Coordinate, Game, GameStatus, IllegalMoveError, InvalidCoordinateError, Move, MoveResult,
    PieceKind, PieceSnapshot,
)
from ..fen import game_to_fen
from ..notation import move_to_text


def _color_to_str(c: Color) -> str:
    return "WHITE" if c is Color.WHITE else "BLACK"


def color_from_str(s: str) -> Color:
    s = str(s).strip().upper()
    if s in ("WHITE", "W"):
        return Color.WHITE
    if s in ("BLACK", "B"):
        return Color.BLACK
    raise ValueError(f"Bad color: {s!r}")


def _alg(c: Optional[Coordinate]) -> Optional[str]:
    return c.to_algebraic() if c is not None else None


def _alg_to_sq(a: str) -> Coordinate:
    return Coordinate.from_algebraic(str(a).strip().lower())


def _kind_from_str(s: str) -> PieceKind:
    s = str(s).strip()
    if len(s) == 1:
        return PieceKind.from_letter(s)
    try:
        return PieceKind[s.upper()]
    except KeyError:
        raise ValueError(f"Unknown piece kind: {s!r}") from None


def piece_to_dict(p: PieceSnapshot) -> Dict[str, Any]:
    return {
        "uid": p.uid,
        "color": _color_to_str(p.color),
        "type": p.kind.name.title(),
        "pos": _alg(p.pos),
        "has_moved": bool(p.has_moved),
        "symbol": p.symbol,
    }


def move_to_dict(m: Move) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "from": _alg(m.from_sq),
        "to": _alg(m.to_sq),
        "kind": m.kind.value,
        "text": move_to_text(m),
    }
    if m.promotion is not None:
        d["promote_to"] = m.promotion.name.title()
    if m.captured is not None:
        d["captured"] = piece_to_dict(m.captured)
        d["captured_sq"] = _alg(m.capture_square)
    if m.is_castling:
        d["rook_from"] = _alg(m.rook_from)
        d["rook_to"] = _alg(m.rook_to)
    return d


def dict_to_move(game: Game, d: Dict[str, Any]) -> Move:
    """Resolve a move dict against the legal moves of the side to move.

    Only `from`, `to` and (for promotions) `promote_to` are read; everything
    else comes from the generated move. Raises IllegalMoveError when nothing
    matches.
    """
    try:
        fr = _alg_to_sq(d["from"])
        to = _alg_to_sq(d["to"])
    except KeyError as exc:
        raise IllegalMoveError(f"Missing square: {exc.args[0]}") from None
    except InvalidCoordinateError as exc:
        raise IllegalMoveError(f"Illegal move: {exc}") from exc

    promote: Optional[PieceKind] = None
    if d.get("promote_to") is not None:
        try:
            promote = _kind_from_str(d["promote_to"])
        except ValueError as exc:
            raise IllegalMoveError(f"Illegal move: {exc}") from exc

    candidates = [m for m in game.legal_moves(fr) if m.to_sq == to]
    if any(m.is_promotion for m in candidates):
        if promote is None:
            raise IllegalMoveError(f"Illegal move: {fr}-{to} needs a promotion piece")
        candidates = [m for m in candidates if m.promotion is promote]
    if len(candidates) != 1 or candidates[0].mover is None \
            or candidates[0].mover.color is not game.side_to_move:
        raise IllegalMoveError(f"Illegal move: {fr}-{to}")
    return candidates[0]


def result_to_dict(r: MoveResult) -> Dict[str, Any]:
    return {
        "move": move_to_dict(r.move),
        "mover": piece_to_dict(r.mover),
        "captured": piece_to_dict(r.captured) if r.captured is not None else None,
        "captured_at": _alg(r.captured_at),
        "promoted": piece_to_dict(r.promoted) if r.promoted is not None else None,
        "en_passant_target": _alg(r.en_passant_target),
        "castling_before": r.castling_before.to_fen(),
        "castling_after": r.castling_after.to_fen(),
        "castling_revoked": [
            {"color": _color_to_str(c), "side": s.value} for c, s in r.castling_revoked
        ],
        "halfmove_clock": r.halfmove_clock,
        "fullmove_number": r.fullmove_number,
        "side_to_move": _color_to_str(r.side_to_move),
    }


def snapshot(game: Game) -> Dict[str, Any]:
    """JSON-friendly snapshot of the current game state."""
    pieces: List[Dict[str, Any]] = [piece_to_dict(p.snapshot()) for p in game.board.iter_pieces()]

    last = game.history.last()
    status = game.status()
    return {
        "side_to_move": _color_to_str(game.side_to_move),
        "pieces": sorted(pieces, key=lambda x: (x["color"], x["type"], x["pos"])),
        "castling": game.board.castling.to_fen(),
        "en_passant_target": _alg(game.board.en_passant_target),
        "ply": len(game.history),
        "halfmove_clock": game.halfmove_clock,
        "fullmove_number": game.fullmove_number,
        "last_move": move_to_dict(last.move) if last is not None else None,
        "last_san": last.san if last is not None else None,
        "check": game.in_check(),
        "checkmate": status is GameStatus.CHECKMATE,
        "status": status.value,
        "winner": _color_to_str(game.winner()) if game.winner() is not None else None,
        "fen": game_to_fen(game),
    }
