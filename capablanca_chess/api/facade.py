from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..core import Coordinate, Game
from ..fen import parse_fen
from ..notation import move_to_text

from .serde import color_from_str, dict_to_move, move_to_dict, result_to_dict, snapshot


LOGGER = logging.getLogger("capablanca.api.facade")


def _index_by_uid(snap: Dict[str, Any]) -> Dict[int, Dict[str, Any]]:
    out: Dict[int, Dict[str, Any]] = {}
    for p in snap.get("pieces", []):
        out[int(p["uid"])] = p
    return out


def diff(before: Dict[str, Any], after: Dict[str, Any]) -> Dict[str, Any]:
    """Compute an animation-friendly diff between two snapshots.

    A promoted pawn shows up as one removed piece plus one added piece, since
    the promoted piece carries a fresh uid.
    """
    b = _index_by_uid(before)
    a = _index_by_uid(after)

    moved: List[Dict[str, Any]] = []
    for uid in sorted(a.keys() & b.keys()):
        bp = b[uid]
        ap = a[uid]
        if bp["pos"] != ap["pos"]:
            moved.append({
                "uid": uid,
                "from": bp["pos"],
                "to": ap["pos"],
                "type": ap["type"],
                "color": ap["color"],
            })

    return {
        "added": [a[uid] for uid in sorted(a.keys() - b.keys())],
        "removed": [b[uid] for uid in sorted(b.keys() - a.keys())],
        "moved": moved,
        "side_to_move": after.get("side_to_move"),
        "last_move": after.get("last_move"),
    }


class ChessEngine:
    """A small, stable facade for UI/server integration.

    Every call returns plain dicts and lists; moves go in as
    `{"from": "f2", "to": "f4"}` (plus `"promote_to"` when promoting).
    """

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game if game is not None else Game.standard()

    @classmethod
    def from_fen(cls, fen: str) -> "ChessEngine":
        return cls(parse_fen(fen))

    def state(self) -> Dict[str, Any]:
        with self.game.locked():
            return snapshot(self.game)

    def legal_moves(self, where: Optional[str] = None) -> List[Dict[str, Any]]:
        """Legal moves for a color name ("white"/"black") or a square ("f2").

        With no argument, the side to move.
        """
        if where is None:
            moves = self.game.legal_moves()
        elif str(where).strip().upper() in ("WHITE", "BLACK", "W", "B"):
            moves = self.game.legal_moves(color_from_str(where))
        else:
            moves = self.game.legal_moves(Coordinate.from_algebraic(str(where).strip().lower()))
        return [move_to_dict(m) for m in moves]

    def apply(self, move: Dict[str, Any]) -> Dict[str, Any]:
        """Resolve, play and describe one move under a single hold of the game lock."""
        with self.game.locked():
            before = snapshot(self.game)
            m = dict_to_move(self.game, move)
            result = self.game.play(m)
            after = snapshot(self.game)
            entry = self.game.history.last()

        meta = {
            "applied": move_to_dict(m),
            "notation": {"text": move_to_text(m), "san": entry.san},
            "result": result_to_dict(result),
            "check": after["check"],
            "checkmate": after["checkmate"],
            "status": after["status"],
        }
        LOGGER.debug("apply", extra={"move": move_to_text(m), "status": after["status"]})
        return {"before": before, "after": after, "diff": diff(before, after), "meta": meta}

    def new_game(self) -> Dict[str, Any]:
        with self.game.locked():
            self.game.new_game()
            return snapshot(self.game)

    def history(self, san: bool = False) -> str:
        return self.game.history.formatted(san=san)
