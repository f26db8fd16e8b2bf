from __future__ import annotations

from .core import Game, Move, PieceKind, FILES, CastleSide, CASTLING_FILES


def to_san(game: Game, move: Move) -> str:
    """Convert a legal move to SAN in the position before it is played.

    Archbishop and Chancellor use the letters A and C.
    """
    if move.is_castling:
        king_side_file = CASTLING_FILES[CastleSide.KING][1]
        san = "O-O" if move.to_sq.file == king_side_file else "O-O-O"
        return san + _check_suffix(game, move)

    mover = game.board.piece_at(move.from_sq)
    if mover is None:
        raise ValueError("Move has no mover on from_sq")

    is_capture = move.is_capture or game.board.piece_at(move.to_sq) is not None
    dest = str(move.to_sq)

    if mover.kind is PieceKind.PAWN:
        if is_capture:
            san = f"{FILES[move.from_sq.file]}x{dest}"
        else:
            san = dest
    else:
        disamb = ""
        if mover.kind is not PieceKind.KING:
            disamb = _disambiguation(game, move, mover.kind)
        san = f"{mover.kind.letter}{disamb}{'x' if is_capture else ''}{dest}"

    if move.is_promotion and move.promotion is not None:
        san += "=" + move.promotion.letter

    return san + _check_suffix(game, move)


def _check_suffix(game: Game, move: Move) -> str:
    after = game.copy()
    after.executor.execute(move)
    side = after.side_to_move
    if not after.generator.in_check(side):
        return ""
    return "+" if after.generator.has_legal(side) else "#"


def _disambiguation(game: Game, move: Move, kind: PieceKind) -> str:
    mover = game.board.piece_at(move.from_sq)
    others = []
    for p in game.board.pieces(mover.color):
        if p is mover or p.kind is not kind:
            continue
        if any(m.to_sq == move.to_sq for m in game.generator.legal(p)):
            others.append(p.pos)

    if not others:
        return ""

    files = [move.from_sq.file] + [c.file for c in others]
    ranks = [move.from_sq.rank] + [c.rank for c in others]

    if files.count(move.from_sq.file) == 1:
        return FILES[move.from_sq.file]
    if ranks.count(move.from_sq.rank) == 1:
        return str(move.from_sq.rank + 1)
    return str(move.from_sq)
