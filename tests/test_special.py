import unittest

from capablanca_chess.core import CastleSide, Color, MoveKind, PieceKind, PROMOTION_KINDS, parse_square
from capablanca_chess.fen import parse_fen
from capablanca_chess.notation import parse_move


CASTLE_FEN = "5k4/10/10/10/10/10/10/R4K3R w KQ - 0 1"


def _castles(game):
    return sorted(str(m.to_sq) for m in game.legal_moves(parse_square("f1")) if m.is_castling)


class TestCastling(unittest.TestCase):
    def test_both_sides_available(self):
        g = parse_fen(CASTLE_FEN)
        self.assertEqual(_castles(g), ["c1", "i1"])

    def test_blocked_by_piece_between(self):
        g = parse_fen("5k4/10/10/10/10/10/10/RN3K3R w KQ - 0 1")
        self.assertEqual(_castles(g), ["i1"])

    def test_king_path_attacked(self):
        g = parse_fen("5k1r2/10/10/10/10/10/10/R4K3R w KQ - 0 1")
        self.assertEqual(_castles(g), ["c1"])

    def test_rook_path_may_be_attacked(self):
        # b1 is crossed by the rook only
        g = parse_fen("1r3k4/10/10/10/10/10/10/R4K3R w KQ - 0 1")
        self.assertEqual(_castles(g), ["c1", "i1"])

    def test_not_out_of_check(self):
        g = parse_fen("k9/10/10/5r4/10/10/10/R4K3R w KQ - 0 1")
        self.assertEqual(_castles(g), [])

    def test_no_right_no_castle(self):
        g = parse_fen("5k4/10/10/10/10/10/10/R4K3R w Q - 0 1")
        self.assertEqual(_castles(g), ["c1"])

    def test_execute_kingside(self):
        g = parse_fen(CASTLE_FEN)
        result = g.play(parse_move(g, "f1i1"))
        self.assertEqual(result.move.kind, MoveKind.CASTLING)
        self.assertEqual(g.board.piece_at(parse_square("i1")).kind, PieceKind.KING)
        self.assertEqual(g.board.piece_at(parse_square("h1")).kind, PieceKind.ROOK)
        self.assertIsNone(g.board.piece_at(parse_square("j1")))
        self.assertIsNone(g.board.piece_at(parse_square("f1")))
        self.assertEqual(set(result.castling_revoked),
                         {(Color.WHITE, CastleSide.KING), (Color.WHITE, CastleSide.QUEEN)})

    def test_execute_queenside(self):
        g = parse_fen(CASTLE_FEN)
        g.play(parse_move(g, "f1c1"))
        self.assertEqual(g.board.piece_at(parse_square("c1")).kind, PieceKind.KING)
        self.assertEqual(g.board.piece_at(parse_square("d1")).kind, PieceKind.ROOK)
        self.assertIsNone(g.board.piece_at(parse_square("a1")))

    def test_loss_is_permanent(self):
        g = parse_fen(CASTLE_FEN)
        for text in ("f1f2", "f8f7", "f2f1", "f7f8"):
            g.play(parse_move(g, text))
        self.assertEqual(g.board.piece_at(parse_square("f1")).kind, PieceKind.KING)
        self.assertEqual(_castles(g), [])
        self.assertFalse(g.board.castling.allowed(Color.WHITE, CastleSide.KING))
        self.assertFalse(g.board.castling.allowed(Color.WHITE, CastleSide.QUEEN))

    def test_rook_move_revokes_one_side(self):
        g = parse_fen(CASTLE_FEN)
        for text in ("j1j2", "f8f7", "j2j1", "f7f8"):
            g.play(parse_move(g, text))
        self.assertEqual(_castles(g), ["c1"])


class TestEnPassant(unittest.TestCase):
    FEN = "5k4/3p6/10/4P5/10/10/10/5K4 b - - 0 1"

    def test_one_extra_move_after_double_push(self):
        g = parse_fen(self.FEN)
        g.play(parse_move(g, "d7d5"))
        self.assertEqual(g.board.en_passant_target, parse_square("d6"))
        moves = g.legal_moves(parse_square("e5"))
        self.assertEqual(len(moves), 2)
        ep = [m for m in moves if m.is_en_passant]
        self.assertEqual(len(ep), 1)
        self.assertEqual(ep[0].to_sq, parse_square("d6"))
        self.assertEqual(ep[0].captured_sq, parse_square("d5"))

    def test_capture_removes_pawn_from_its_square(self):
        g = parse_fen(self.FEN)
        g.play(parse_move(g, "d7d5"))
        result = g.play(parse_move(g, "e5d6"))
        self.assertEqual(result.captured_at, parse_square("d5"))
        self.assertEqual(result.captured.kind, PieceKind.PAWN)
        self.assertIsNone(g.board.piece_at(parse_square("d5")))
        self.assertIsNone(g.board.piece_at(parse_square("e5")))
        self.assertEqual(g.board.piece_at(parse_square("d6")).color, Color.WHITE)
        self.assertEqual(g.halfmove_clock, 0)

    def test_window_closes_after_one_ply(self):
        g = parse_fen(self.FEN)
        g.play(parse_move(g, "d7d5"))
        g.play(parse_move(g, "f1g1"))
        g.play(parse_move(g, "f8g8"))
        self.assertIsNone(g.board.en_passant_target)
        self.assertFalse(any(m.is_en_passant for m in g.legal_moves(parse_square("e5"))))

    def test_single_push_gives_no_window(self):
        g = parse_fen(self.FEN)
        g.play(parse_move(g, "d7d6"))
        self.assertIsNone(g.board.en_passant_target)


class TestPromotion(unittest.TestCase):
    FEN = "5k4/1P8/10/10/10/10/10/5K4 w - - 0 1"

    def test_six_candidates(self):
        g = parse_fen(self.FEN)
        moves = g.legal_moves(parse_square("b7"))
        self.assertEqual(len(moves), 6)
        self.assertTrue(all(m.kind is MoveKind.PROMOTION for m in moves))
        self.assertEqual({m.promotion for m in moves}, set(PROMOTION_KINDS))

    def test_queen_candidate_creates_new_piece(self):
        g = parse_fen(self.FEN)
        pawn = g.board.piece_at(parse_square("b7"))
        queen_move = next(m for m in g.legal_moves(parse_square("b7")) if m.promotion is PieceKind.QUEEN)
        result = g.play(queen_move)
        queen = g.board.piece_at(parse_square("b8"))
        self.assertEqual(queen.kind, PieceKind.QUEEN)
        self.assertEqual(queen.color, Color.WHITE)
        self.assertNotEqual(queen.uid, pawn.uid)
        self.assertEqual(result.promoted.uid, queen.uid)
        self.assertNotIn(pawn.uid, [p.uid for p in g.board.iter_pieces()])
        self.assertIsNone(g.board.piece_at(parse_square("b7")))

    def test_capturing_promotion(self):
        g = parse_fen("2r2k4/1P8/10/10/10/10/10/5K4 w - - 0 1")
        captures = [m for m in g.legal_moves(parse_square("b7")) if m.to_sq == parse_square("c8")]
        self.assertEqual(len(captures), 6)
        self.assertTrue(all(m.kind is MoveKind.PROMOTION and m.is_capture for m in captures))
        result = g.play(parse_move(g, "b7c8a"))
        self.assertEqual(result.captured.kind, PieceKind.ROOK)
        self.assertEqual(g.board.piece_at(parse_square("c8")).kind, PieceKind.ARCHBISHOP)


if __name__ == "__main__":
    unittest.main()
