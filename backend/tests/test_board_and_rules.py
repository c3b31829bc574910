from __future__ import annotations

import sys
import unittest
from pathlib import Path


BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


from core.board import Board  # noqa: E402
from core.move import Move  # noqa: E402
from core.pieces import Color, King, Man  # noqa: E402
from core.rules import (  # noqa: E402
    any_capture_available,
    capturing_positions,
    count_candidate_destinations,
    legal_destinations,
    legal_moves,
)


class BoardTests(unittest.TestCase):
    def test_initial_layout(self) -> None:
        board = Board.initial()
        self.assertEqual(len(board), 32)
        for pos in range(1, 13):
            self.assertEqual(board.getPiece(pos), Man(Color.BLACK))
        for pos in range(13, 21):
            self.assertIsNone(board.getPiece(pos))
        for pos in range(21, 33):
            self.assertEqual(board.getPiece(pos), Man(Color.RED))
        self.assertEqual(board.count(Color.RED), 12)
        self.assertEqual(board.count(Color.BLACK), 12)

    def test_initial_layout_respects_top_color(self) -> None:
        board = Board.initial(top_color=Color.RED)
        self.assertEqual(board.getPiece(1), Man(Color.RED))
        self.assertEqual(board.getPiece(32), Man(Color.BLACK))
        self.assertEqual(board.forward_sign(Color.RED), 1)
        self.assertEqual(board.promotion_row(Color.BLACK), 1)

    def test_set_is_a_plain_overwrite(self) -> None:
        board = Board.empty()
        board.setPiece(18, King(Color.RED))
        self.assertEqual(board.getPiece(18), King(Color.RED))
        self.assertEqual(board.king_count(Color.RED), 1)
        board.clear(18)
        self.assertIsNone(board.getPiece(18))
        self.assertEqual(len(board), 32)

    def test_out_of_range_positions_raise(self) -> None:
        board = Board.initial()
        with self.assertRaises(ValueError):
            board.getPiece(0)
        with self.assertRaises(ValueError):
            board.setPiece(33, Man(Color.RED))

    def test_copy_and_state_snapshot(self) -> None:
        board = Board.from_layout({3: King(Color.BLACK), 22: Man(Color.RED)})
        clone = board.copy()
        clone.clear(3)
        self.assertEqual(board.getPiece(3), King(Color.BLACK))
        self.assertEqual(Board.from_state(board.to_state()), board)

    def test_state_with_repeated_or_excess_squares_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Board.from_state(("black", ((3, "red", False), (3, "black", False))))
        with self.assertRaises(ValueError):
            Board.from_state(("black", ((33, "red", False),)))
        crowded = tuple((pos % 32 + 1, "red", False) for pos in range(33))
        with self.assertRaises(ValueError):
            Board.from_state(("black", crowded))
        self.assertEqual(len(Board.from_state(("black", ()))), 32)

    def test_promotion_square(self) -> None:
        board = Board.initial()
        self.assertTrue(board.is_promotion_square(30, Color.BLACK))
        self.assertTrue(board.is_promotion_square(2, Color.RED))
        self.assertFalse(board.is_promotion_square(2, Color.BLACK))

    def test_man_promotes_to_king_of_same_color(self) -> None:
        self.assertEqual(Man(Color.RED).promote(), King(Color.RED))
        self.assertNotEqual(Man(Color.RED), King(Color.RED))


class MoveGenerationTests(unittest.TestCase):
    def test_initial_front_row_piece_has_two_simple_moves(self) -> None:
        board = Board.initial()
        destinations = legal_destinations(board, 9, Color.BLACK)
        self.assertEqual(destinations.simple, {13, 14})
        self.assertEqual(destinations.captures, {})

    def test_back_row_piece_is_blocked_at_start(self) -> None:
        board = Board.initial()
        self.assertTrue(legal_destinations(board, 1, Color.BLACK).is_empty)

    def test_wrong_color_or_empty_square_yields_nothing(self) -> None:
        board = Board.initial()
        self.assertTrue(legal_destinations(board, 9, Color.RED).is_empty)
        self.assertTrue(legal_destinations(board, 15, Color.BLACK).is_empty)

    def test_men_only_move_forward(self) -> None:
        board = Board.from_layout({14: Man(Color.BLACK), 18: Man(Color.RED)})
        self.assertEqual(legal_destinations(board, 14, Color.BLACK).simple, {17})
        self.assertEqual(legal_destinations(board, 18, Color.RED).simple, {15})

    def test_king_moves_in_all_directions(self) -> None:
        board = Board.from_layout({14: King(Color.BLACK)})
        self.assertEqual(legal_destinations(board, 14, Color.BLACK).simple, {9, 10, 17, 18})

    def test_capture_records_jumped_square(self) -> None:
        board = Board.from_layout({22: Man(Color.RED), 18: Man(Color.BLACK)})
        destinations = legal_destinations(board, 22, Color.RED)
        self.assertEqual(destinations.captures, {15: 18})
        self.assertEqual(destinations.simple, {17})

    def test_capture_needs_empty_landing(self) -> None:
        board = Board.from_layout({22: Man(Color.RED), 18: Man(Color.BLACK), 15: Man(Color.BLACK)})
        self.assertEqual(legal_destinations(board, 22, Color.RED).captures, {})

    def test_men_do_not_capture_backward(self) -> None:
        board = Board.from_layout({15: Man(Color.RED), 18: Man(Color.BLACK)})
        self.assertEqual(legal_destinations(board, 15, Color.RED).captures, {})
        board.setPiece(15, King(Color.RED))
        self.assertEqual(legal_destinations(board, 15, Color.RED).captures, {22: 18})

    def test_no_capture_over_the_edge(self) -> None:
        # 5 is on the left edge; a jump over 1 would leave the board.
        board = Board.from_layout({5: King(Color.RED), 1: Man(Color.BLACK)})
        self.assertEqual(legal_destinations(board, 5, Color.RED).captures, {})

    def test_mandatory_capture_queries(self) -> None:
        board = Board.from_layout(
            {22: Man(Color.RED), 18: Man(Color.BLACK), 25: Man(Color.RED), 30: Man(Color.RED)}
        )
        self.assertTrue(any_capture_available(board, Color.RED))
        self.assertEqual(capturing_positions(board, Color.RED), [22])
        self.assertFalse(any_capture_available(board, Color.BLACK))
        self.assertEqual(legal_moves(board, Color.RED), [Move(22, 15, 18)])

    def test_legal_moves_without_captures(self) -> None:
        board = Board.initial()
        moves = legal_moves(board, Color.BLACK)
        self.assertEqual(len(moves), 7)
        self.assertTrue(all(not move.is_capture for move in moves))
        self.assertEqual(count_candidate_destinations(board, Color.BLACK), 7)
        self.assertEqual(str(Move(9, 13)), "9-13")
        self.assertEqual(str(Move(22, 15, 18)), "22x15")


if __name__ == "__main__":
    unittest.main()
