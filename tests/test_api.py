import json
import unittest

from capablanca_chess.api import ChessEngine, dict_to_move, move_to_dict, snapshot
from capablanca_chess.core import Game, IllegalMoveError, InvalidCoordinateError, PieceKind
from capablanca_chess.fen import STARTPOS_FEN


class TestSnapshot(unittest.TestCase):
    def test_start_state(self):
        state = ChessEngine().state()
        self.assertEqual(len(state["pieces"]), 40)
        self.assertEqual(state["side_to_move"], "WHITE")
        self.assertEqual(state["fen"], STARTPOS_FEN)
        self.assertEqual(state["castling"], "KQkq")
        self.assertEqual(state["status"], "in_progress")
        self.assertFalse(state["check"])
        self.assertIsNone(state["last_move"])
        self.assertIsNone(state["winner"])
        # must survive a JSON round trip unchanged
        self.assertEqual(json.loads(json.dumps(state)), state)

    def test_mate_flags(self):
        state = ChessEngine.from_fen("k9/1Q8/2K7/10/10/10/10/10 b - - 0 1").state()
        self.assertTrue(state["check"])
        self.assertTrue(state["checkmate"])
        self.assertEqual(state["status"], "checkmate")
        self.assertEqual(state["winner"], "WHITE")


class TestMoveDicts(unittest.TestCase):
    def test_resolves_against_legal_moves(self):
        g = Game.standard()
        m = dict_to_move(g, {"from": "f2", "to": "f4"})
        self.assertIn(m, g.legal_moves())
        self.assertIsNotNone(m.mover)

    def test_roundtrip_through_dict(self):
        g = Game.standard()
        for m in g.legal_moves():
            with self.subTest(move=str(m)):
                self.assertEqual(dict_to_move(g, move_to_dict(m)), m)

    def test_rejects_bad_input(self):
        g = Game.standard()
        bad = (
            {"from": "f2", "to": "f5"},
            {"from": "f7", "to": "f6"},
            {"from": "k2", "to": "k3"},
            {"from": "f2"},
            {"from": "e4", "to": "e5"},
            {"from": "f\u00b2", "to": "f4"},
            {"from": "f2", "to": "f\u0664"},
        )
        for d in bad:
            with self.subTest(d=d):
                with self.assertRaises(IllegalMoveError):
                    dict_to_move(g, d)

    def test_promotion_needs_piece(self):
        g = ChessEngine.from_fen("5k4/1P8/10/10/10/10/10/5K4 w - - 0 1").game
        with self.assertRaises(IllegalMoveError):
            dict_to_move(g, {"from": "b7", "to": "b8"})
        m = dict_to_move(g, {"from": "b7", "to": "b8", "promote_to": "Chancellor"})
        self.assertIs(m.promotion, PieceKind.CHANCELLOR)
        m = dict_to_move(g, {"from": "b7", "to": "b8", "promote_to": "a"})
        self.assertIs(m.promotion, PieceKind.ARCHBISHOP)


class TestChessEngine(unittest.TestCase):
    def test_legal_moves_filters(self):
        eng = ChessEngine()
        self.assertEqual(len(eng.legal_moves()), 28)
        self.assertEqual(len(eng.legal_moves("black")), 28)
        self.assertEqual(sorted(d["to"] for d in eng.legal_moves("f2")), ["f3", "f4"])
        with self.assertRaises(InvalidCoordinateError):
            eng.legal_moves("z9")

    def test_apply_returns_diff(self):
        eng = ChessEngine()
        out = eng.apply({"from": "f2", "to": "f4"})
        self.assertEqual(set(out), {"before", "after", "diff", "meta"})
        moved = out["diff"]["moved"]
        self.assertEqual(len(moved), 1)
        self.assertEqual((moved[0]["from"], moved[0]["to"]), ("f2", "f4"))
        self.assertEqual(out["diff"]["added"], [])
        self.assertEqual(out["diff"]["removed"], [])
        self.assertEqual(out["after"]["side_to_move"], "BLACK")
        self.assertEqual(out["after"]["en_passant_target"], "f3")
        self.assertEqual(out["meta"]["notation"], {"text": "f2f4", "san": "f4"})
        self.assertEqual(out["meta"]["result"]["halfmove_clock"], 0)

    def test_apply_castling_moves_two_pieces(self):
        eng = ChessEngine.from_fen("5k4/10/10/10/10/10/10/R4K3R w KQ - 0 1")
        out = eng.apply({"from": "f1", "to": "i1"})
        moves = sorted((d["from"], d["to"]) for d in out["diff"]["moved"])
        self.assertEqual(moves, [("f1", "i1"), ("j1", "h1")])
        self.assertEqual(out["meta"]["notation"]["san"], "O-O")
        revoked = out["meta"]["result"]["castling_revoked"]
        self.assertEqual({r["side"] for r in revoked}, {"king", "queen"})
        self.assertEqual(out["after"]["castling"], "-")

    def test_apply_promotion_swaps_piece(self):
        eng = ChessEngine.from_fen("5k4/1P8/10/10/10/10/10/5K4 w - - 0 1")
        out = eng.apply({"from": "b7", "to": "b8", "promote_to": "Queen"})
        self.assertEqual(len(out["diff"]["removed"]), 1)
        self.assertEqual(len(out["diff"]["added"]), 1)
        self.assertEqual(out["diff"]["added"][0]["type"], "Queen")
        self.assertEqual(out["meta"]["notation"]["san"], "b8=Q+")
        self.assertTrue(out["meta"]["check"])

    def test_apply_illegal_leaves_state(self):
        eng = ChessEngine()
        before = eng.state()
        with self.assertRaises(IllegalMoveError):
            eng.apply({"from": "f2", "to": "f6"})
        self.assertEqual(eng.state(), before)

    def test_new_game_and_history(self):
        eng = ChessEngine()
        eng.apply({"from": "f2", "to": "f4"})
        eng.apply({"from": "f7", "to": "f5"})
        self.assertEqual(eng.history(san=True), "1. f4 f5")
        state = eng.new_game()
        self.assertEqual(state["fen"], STARTPOS_FEN)
        self.assertEqual(eng.history(), "(no moves)")


if __name__ == "__main__":
    unittest.main()
