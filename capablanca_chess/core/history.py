from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .executor import MoveResult
from .moves import Move
from .types import Color

@dataclass(frozen=True)
class HistoryEntry:
    ply: int
    move: Move
    san: str
    result: MoveResult

    @property
    def coordinate_text(self) -> str:
        return f"{self.move.from_sq}-{self.move.to_sq}"

class MoveHistory:
    """Append-only log of executed moves. Entries are keyed by ply, not by move equality."""

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []

    def append(self, result: MoveResult, san: str) -> HistoryEntry:
        entry = HistoryEntry(ply=len(self._entries) + 1, move=result.move, san=san, result=result)
        self._entries.append(entry)
        return entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))

    def get(self, index: int) -> Optional[HistoryEntry]:
        if index < 0 or index >= len(self._entries):
            return None
        return self._entries[index]

    def last(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    @property
    def moves(self) -> List[Move]:
        return [e.move for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def coordinate_text(self) -> str:
        if not self._entries:
            return "(no moves)"
        return " ".join(e.coordinate_text for e in self._entries)

    def formatted(self, san: bool = False) -> str:
        """Numbered move list: '1. f2-f4 f7-f5  2. ...'."""
        if not self._entries:
            return "(no moves)"
        groups: List[str] = []
        for e in self._entries:
            text = e.san if san else e.coordinate_text
            if e.result.mover.color is Color.WHITE:
                groups.append(f"{e.result.fullmove_number}. {text}")
            elif groups:
                groups[-1] += f" {text}"
            else:
                # Black moved first; fullmove already advanced past this move
                groups.append(f"{e.result.fullmove_number - 1}... {text}")
        return "  ".join(groups)
