import unittest

from capablanca_chess.core import Color, Game, PieceKind, parse_square
from capablanca_chess.fen import parse_fen, game_to_fen, STARTPOS_FEN
from capablanca_chess.notation import parse_move


class TestFEN(unittest.TestCase):
    def test_roundtrip_startpos(self):
        g = parse_fen(STARTPOS_FEN)
        self.assertEqual(game_to_fen(g), STARTPOS_FEN)
        self.assertEqual(game_to_fen(Game.standard()), STARTPOS_FEN)

    def test_roundtrip_after_double_push(self):
        fen = "rnabqkbcnr/pppppppppp/10/10/5P4/10/PPPPP1PPPP/RNABQKBCNR b KQkq f3 0 1"
        g = Game.standard()
        g.play(parse_move(g, "f2f4"))
        self.assertEqual(game_to_fen(g), fen)
        parsed = parse_fen(fen)
        self.assertEqual(game_to_fen(parsed), fen)
        self.assertEqual(parsed.board.en_passant_target, parse_square("f3"))

    def test_roundtrip_middlegame(self):
        fen = "r1abqk3r/ppp2ppppp/2n7/3Pp5/4P3c1/2N4N2/PPP2PPPPP/R1A1QKBC1R w KQkq - 3 9"
        self.assertEqual(game_to_fen(parse_fen(fen)), fen)

    def test_piece_letters(self):
        g = parse_fen(STARTPOS_FEN)
        self.assertIs(g.board.piece_at(parse_square("c1")).kind, PieceKind.ARCHBISHOP)
        self.assertIs(g.board.piece_at(parse_square("h8")).kind, PieceKind.CHANCELLOR)
        self.assertIs(g.board.piece_at(parse_square("h8")).color, Color.BLACK)

    def test_has_moved_flags(self):
        g = parse_fen("r4k3r/4p5/10/10/10/3P6/10/R4K3R w Qk - 0 1")
        self.assertFalse(g.board.piece_at(parse_square("e7")).has_moved)
        self.assertTrue(g.board.piece_at(parse_square("d3")).has_moved)
        self.assertTrue(g.board.piece_at(parse_square("j1")).has_moved)
        self.assertFalse(g.board.piece_at(parse_square("a1")).has_moved)
        self.assertFalse(g.board.piece_at(parse_square("f1")).has_moved)
        self.assertTrue(g.board.piece_at(parse_square("a8")).has_moved)

    def test_fen_invalid_cases(self):
        fen_invalid_cases = (
            "rnabqkbcnr/pppppppppp/10/10/10/10/PPPPPPPPPP/RNABQKBCN w KQkq - 0 1",  # short rank
            "rnabqkbcnr/pppppppppp/10/10/10/10/PPPPPPPPPP w KQkq - 0 1",  # seven ranks
            "5k4/10/10/10/10/10/10/11 w - - 0 1",  # run wider than the board
            "5k4/10/10/10/10/10/10/10 w - - 0 1",  # missing white king
            "5k4/10/10/10/10/10/10/4KK4 w - - 0 1",  # extra white king
            "5k4/10/10/10/10/10/10/5K4 w K - 0 1",  # K without rook j1
            "5k4/10/10/10/10/10/10/5K4 w KK - 0 1",  # duplicate flag
            "5k4/10/10/10/10/10/10/5K4 w X - 0 1",  # unknown flag
            "5k4/10/10/10/10/10/10/5K4 x - - 0 1",  # bad side to move
            "5k4/10/10/10/10/10/10/5K4 w - e3 0 1",  # no pushed pawn behind target
            "5k4/10/10/10/10/10/10/5K4 w - k6 0 1",  # off-board target
            "5k4/10/10/10/10/10/10/5K4 w - - 0 0",  # fullmove must be positive
            "5k4/10/10/10/10/10/10/5K4 w - - x 1",  # non-numeric clock
            "5k4/10/10/10/10/10/10/5K4 w - -",  # missing fields
            "5k4/10/10/10/10/10/10/5X4 w - - 0 1",  # unknown piece
        )

        for fen in fen_invalid_cases:
            with self.subTest(fen=fen):
                with self.assertRaises(ValueError):
                    parse_fen(fen)


if __name__ == "__main__":
    unittest.main()
