from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from .core import Game, GameStatus, IllegalMoveError, ascii_board, parse_square
from .fen import parse_fen, game_to_fen
from .notation import move_to_text, parse_move
from .perft import perft, perft_divide

LOGGER = logging.getLogger("capablanca.cli")

LOG_LEVEL_ENV = "CAPABLANCA_LOG_LEVEL"

_STATUS_TEXT = {
    GameStatus.CHECKMATE: "Checkmate.",
    GameStatus.STALEMATE: "Stalemate.",
    GameStatus.DRAW_FIFTY_MOVE: "Draw by the fifty-move rule.",
}


def _load(args: argparse.Namespace) -> Game:
    return parse_fen(args.fen) if args.fen else Game.standard()


def cmd_perft(args: argparse.Namespace) -> int:
    g = _load(args)
    if args.divide:
        out = perft_divide(g, args.depth)
        total = 0
        for k in sorted(out):
            print(f"{k}: {out[k]}")
            total += out[k]
        print(f"Total: {total}")
    else:
        print(perft(g, args.depth))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    g = _load(args)
    print(ascii_board(g.board, coordinates=True))
    print()
    print(game_to_fen(g))
    return 0


def cmd_moves(args: argparse.Namespace) -> int:
    g = _load(args)
    moves = g.legal_moves(parse_square(args.square)) if args.square else g.legal_moves()
    for m in sorted(moves, key=move_to_text):
        print(f"{move_to_text(m)}  {m}")
    print(f"Total: {len(moves)}")
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    g = _load(args)

    while True:
        print(ascii_board(g.board, coordinates=True))
        print()
        status = g.status()
        if status.is_over:
            print(_STATUS_TEXT[status])
            winner = g.winner()
            if winner is not None:
                print(f"{winner.name.title()} wins.")
            print(g.history.formatted(san=True))
            return 0
        if g.in_check():
            print("Check!")

        text = input(f"{g.side_to_move.name.title()} to move (e.g. f2f4): ").strip()
        if text in ("quit", "exit"):
            return 0
        if text == "history":
            print(g.history.formatted(san=True))
            continue
        try:
            m = parse_move(g, text)
        except IllegalMoveError as exc:
            print(exc)
            continue
        g.play(m)
        last = g.history.last()
        print("SAN:", last.san if last is not None else move_to_text(m))


def _configure_logging(level: Optional[str]) -> None:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="capablanca-chess")
    ap.add_argument("--log-level", type=str, default=None,
                    help=f"logging level (default: ${LOG_LEVEL_ENV} or WARNING)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("perft", help="Run perft")
    sp.add_argument("--depth", type=int, default=2)
    sp.add_argument("--fen", type=str, default=None)
    sp.add_argument("--divide", action="store_true")
    sp.set_defaults(fn=cmd_perft)

    ss = sub.add_parser("show", help="Show ASCII board and FEN")
    ss.add_argument("--fen", type=str, default=None)
    ss.set_defaults(fn=cmd_show)

    sm = sub.add_parser("moves", help="List legal moves")
    sm.add_argument("--fen", type=str, default=None)
    sm.add_argument("--square", type=str, default=None, help="only moves from this square")
    sm.set_defaults(fn=cmd_moves)

    pl = sub.add_parser("play", help="Two players at one terminal")
    pl.add_argument("--fen", type=str, default=None)
    pl.set_defaults(fn=cmd_play)

    args = ap.parse_args(argv)
    _configure_logging(args.log_level)
    LOGGER.debug("command", extra={"cmd": args.cmd})
    return int(args.fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
