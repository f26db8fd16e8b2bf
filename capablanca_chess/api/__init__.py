"""Stable boundary for presentation code.

Speaks only JSON-friendly structures:
- state snapshots
- move encode/decode
- apply producing diffs suitable for animation
"""

from .facade import ChessEngine, diff
from .serde import move_to_dict, dict_to_move, snapshot, result_to_dict

__all__ = ["ChessEngine", "diff", "move_to_dict", "dict_to_move", "snapshot", "result_to_dict"]
