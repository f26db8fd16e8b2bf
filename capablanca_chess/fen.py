from __future__ import annotations

from typing import List

from .core import (
    Game, Color, Coordinate, Piece, PieceKind, CastlingRights, CastleSide,
    InvalidCoordinateError, NUM_FILES, NUM_RANKS, sq, king_home, rook_home,
)

STARTPOS_FEN = "rnabqkbcnr/pppppppppp/10/10/10/10/PPPPPPPPPP/RNABQKBCNR w KQkq - 0 1"

_CASTLE_FLAGS = {
    "K": (Color.WHITE, CastleSide.KING),
    "Q": (Color.WHITE, CastleSide.QUEEN),
    "k": (Color.BLACK, CastleSide.KING),
    "q": (Color.BLACK, CastleSide.QUEEN),
}


def _parse_placement(g: Game, placement: str) -> None:
    ranks = placement.split("/")
    if len(ranks) != NUM_RANKS:
        raise ValueError("FEN placement must have 8 ranks")

    for rank_idx, row in enumerate(ranks):
        r = NUM_RANKS - 1 - rank_idx
        f = 0
        i = 0
        while i < len(row):
            ch = row[i]
            if ch.isdigit():
                # runs can be two digits wide ("10")
                j = i
                while j < len(row) and row[j].isdigit():
                    j += 1
                gap = int(row[i:j])
                if gap < 1 or gap > NUM_FILES:
                    raise ValueError("Bad empty-square run in FEN")
                f += gap
                if f > NUM_FILES:
                    raise ValueError("Bad rank width in FEN")
                i = j
                continue
            if f >= NUM_FILES:
                raise ValueError("Bad rank width in FEN")
            color = Color.WHITE if ch.isupper() else Color.BLACK
            kind = PieceKind.from_letter(ch)
            g.board.add_piece(Piece(kind, color, sq(f, r)))
            f += 1
            i += 1
        if f != NUM_FILES:
            raise ValueError("Bad rank width in FEN")


def _parse_castling(g: Game, castling: str) -> CastlingRights:
    rights = CastlingRights.none()
    if castling == "-":
        return rights
    seen = set()
    granted = []
    for flag in castling:
        if flag not in _CASTLE_FLAGS or flag in seen:
            raise ValueError("Bad castling rights in FEN")
        seen.add(flag)
        color, side = _CASTLE_FLAGS[flag]
        king = g.board.piece_at(king_home(color))
        rook = g.board.piece_at(rook_home(color, side))
        if king is None or king.kind is not PieceKind.KING or king.color is not color:
            raise ValueError("Bad castling rights in FEN")
        if rook is None or rook.kind is not PieceKind.ROOK or rook.color is not color:
            raise ValueError("Bad castling rights in FEN")
        granted.append((color, side))

    rights = CastlingRights(
        white_king=(Color.WHITE, CastleSide.KING) in granted,
        white_queen=(Color.WHITE, CastleSide.QUEEN) in granted,
        black_king=(Color.BLACK, CastleSide.KING) in granted,
        black_queen=(Color.BLACK, CastleSide.QUEEN) in granted,
    )
    return rights


def _parse_en_passant(g: Game, ep: str):
    if ep == "-":
        return None
    try:
        ep_sq = Coordinate.from_algebraic(ep)
    except InvalidCoordinateError as exc:
        raise ValueError("Bad en-passant square in FEN") from exc

    # the side that just moved is the opponent of the side to move
    pusher = g.side_to_move.opponent()
    if ep_sq.rank != pusher.pawn_rank + pusher.forward:
        raise ValueError("Bad en-passant square in FEN")
    to_sq = ep_sq.offset(0, pusher.forward)
    from_sq = ep_sq.offset(0, -pusher.forward)

    if g.board.piece_at(ep_sq) is not None or g.board.piece_at(from_sq) is not None:
        raise ValueError("Bad en-passant square in FEN")
    pawn = g.board.piece_at(to_sq)
    if pawn is None or pawn.kind is not PieceKind.PAWN or pawn.color is not pusher:
        raise ValueError("Bad en-passant square in FEN")
    return ep_sq


def parse_fen(fen: str) -> Game:
    """Parse a ten-file Capablanca FEN into a Game."""
    parts = fen.strip().split()
    if len(parts) != 6:
        raise ValueError("FEN must have 6 fields")

    placement, stm, castling, ep, halfmove, fullmove = parts

    g = Game()
    _parse_placement(g, placement)

    for color in Color:
        kings = [p for p in g.board.iter_pieces(color) if p.kind is PieceKind.KING]
        if len(kings) != 1:
            raise ValueError("FEN must contain exactly one king per side")

    if stm == "w":
        g.turns.side_to_move = Color.WHITE
    elif stm == "b":
        g.turns.side_to_move = Color.BLACK
    else:
        raise ValueError("Bad side-to-move in FEN")

    if not (halfmove.isdigit() and fullmove.isdigit()) or int(fullmove) < 1:
        raise ValueError("Bad move counters in FEN")
    g.turns.halfmove_clock = int(halfmove)
    g.turns.fullmove_number = int(fullmove)

    rights = _parse_castling(g, castling)
    g.board.castling = rights
    g.board.en_passant_target = _parse_en_passant(g, ep)

    # has_moved flags: castling pieces follow the rights, pawns their rank
    for p in g.board.iter_pieces():
        if p.kind is PieceKind.PAWN:
            p.has_moved = p.pos.rank != p.color.pawn_rank
        elif p.kind is PieceKind.KING:
            p.has_moved = not (p.pos == king_home(p.color) and (
                rights.allowed(p.color, CastleSide.KING) or rights.allowed(p.color, CastleSide.QUEEN)))
        elif p.kind is PieceKind.ROOK:
            p.has_moved = not any(
                p.pos == rook_home(p.color, side) and rights.allowed(p.color, side) for side in CastleSide
            )

    return g


def game_to_fen(g: Game) -> str:
    rows: List[str] = []
    for r in range(NUM_RANKS - 1, -1, -1):
        empty = 0
        row = []
        for f in range(NUM_FILES):
            p = g.board.piece_at(sq(f, r))
            if p is None:
                empty += 1
                continue
            if empty:
                row.append(str(empty))
                empty = 0
            row.append(p.symbol)
        if empty:
            row.append(str(empty))
        rows.append("".join(row))
    placement = "/".join(rows)

    stm = "w" if g.side_to_move is Color.WHITE else "b"
    castling = g.board.castling.to_fen()
    ep = g.board.en_passant_target.to_algebraic() if g.board.en_passant_target is not None else "-"

    return f"{placement} {stm} {castling} {ep} {g.halfmove_clock} {g.fullmove_number}"
