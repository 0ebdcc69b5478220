import unittest

import numpy as np

from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS, Player, IllegalMoveError, OutOfRangeError
from tests.helpers import draw_pattern, fill_without_winner


class TestBoardState(unittest.TestCase):
    def setUp(self):
        self.board = Board()

    def test_reset_empties_every_column(self):
        self.board.place(Player.ONE, 2)
        self.board.place(Player.TWO, 2)
        self.board.reset()
        for col in range(COLS):
            self.assertEqual(self.board.column_height(col), 0)
            self.assertTrue(self.board.can_place(col))
        self.assertFalse(self.board.is_full)

    def test_place_lands_on_column_height(self):
        self.board.place(Player.TWO, 4)
        before = self.board.column_height(4)
        row = self.board.place(Player.ONE, 4)
        self.assertEqual(row, before)
        self.assertEqual(self.board.get_cell(before, 4), Player.ONE)
        self.assertEqual(self.board.column_height(4), before + 1)

    def test_full_column_rejects_move_and_leaves_board_unchanged(self):
        for i in range(ROWS):
            self.board.place(Player.ONE if i % 2 == 0 else Player.TWO, 2)
        self.assertFalse(self.board.can_place(2))

        snapshot = self.board.get_state()
        with self.assertRaises(IllegalMoveError):
            self.board.place(Player.ONE, 2)
        self.assertTrue(np.array_equal(snapshot, self.board.grid))
        self.assertEqual(len(self.board.moves_made), ROWS)

    def test_empty_player_cannot_be_placed(self):
        with self.assertRaises(IllegalMoveError):
            self.board.place(Player.EMPTY, 0)
        self.assertEqual(self.board.column_height(0), 0)

    def test_non_player_values_are_rejected(self):
        for value in (1, "X", None):
            with self.assertRaises(IllegalMoveError):
                self.board.place(value, 0)
        self.assertEqual(self.board.column_height(0), 0)

    def test_full_column_is_not_logged_as_warning(self):
        previous = debug.level
        self.addCleanup(debug.configure, level=previous)
        debug.configure(level=DebugLevel.DEBUG)
        for _ in range(ROWS):
            self.board.place(Player.ONE, 1)

        with self.assertLogs("connectfour", level="DEBUG") as logs:
            with self.assertRaises(IllegalMoveError):
                self.board.place(Player.TWO, 1)
        self.assertTrue(logs.records)
        self.assertTrue(all(record.levelname == "DEBUG" for record in logs.records))

    def test_out_of_range_access(self):
        with self.assertRaises(OutOfRangeError):
            self.board.get_cell(ROWS, 0)
        with self.assertRaises(OutOfRangeError):
            self.board.get_cell(0, COLS)
        with self.assertRaises(OutOfRangeError):
            self.board.get_cell(-1, 0)
        with self.assertRaises(OutOfRangeError):
            self.board.column_height(COLS)
        with self.assertRaises(IndexError):
            self.board.place(Player.ONE, COLS)

    def test_valid_moves_skip_full_columns(self):
        for _ in range(ROWS):
            self.board.place(Player.ONE, 0)
        self.assertEqual(self.board.get_valid_moves(), list(range(1, COLS)))

    def test_copy_is_independent(self):
        self.board.place(Player.ONE, 3)
        clone = self.board.copy()
        clone.place(Player.TWO, 3)
        self.assertEqual(self.board.column_height(3), 1)
        self.assertEqual(clone.column_height(3), 2)


class TestWinDetection(unittest.TestCase):
    def setUp(self):
        self.board = Board()

    def test_no_winner_for_lone_tile(self):
        row = self.board.place(Player.ONE, 3)
        self.assertEqual(self.board.find_winner(row, 3, Player.ONE), Player.EMPTY)
        self.assertEqual(self.board.find_consecutive_tiles(row, 3, Player.ONE), [0] * 8)

    def test_vertical_four(self):
        for _ in range(4):
            row = self.board.place(Player.ONE, 3)
        self.assertEqual(row, 3)
        self.assertEqual(self.board.find_winner(3, 3, Player.ONE), Player.ONE)
        self.assertEqual(self.board.find_winner(3, 3, Player.TWO), Player.EMPTY)

    def test_horizontal_four_from_either_end(self):
        for col in range(4):
            self.board.place(Player.TWO, col)
        self.assertEqual(self.board.find_winner(0, 0, Player.TWO), Player.TWO)
        self.assertEqual(self.board.find_winner(0, 3, Player.TWO), Player.TWO)

    def test_three_in_a_row_is_not_a_win(self):
        for col in range(3):
            self.board.place(Player.ONE, col)
        self.assertEqual(self.board.find_winner(0, 2, Player.ONE), Player.EMPTY)

    def test_rising_diagonal(self):
        for col in range(1, 4):
            for _ in range(col):
                self.board.place(Player.TWO, col)
        for col in range(4):
            self.board.place(Player.ONE, col)
        self.assertEqual(self.board.find_winner(3, 3, Player.ONE), Player.ONE)
        self.assertEqual(self.board.find_winner(0, 0, Player.ONE), Player.ONE)

    def test_falling_diagonal(self):
        for col in range(3):
            for _ in range(3 - col):
                self.board.place(Player.TWO, col)
        for col in range(4):
            self.board.place(Player.ONE, col)
        self.assertEqual(self.board.get_cell(3, 0), Player.ONE)
        self.assertEqual(self.board.find_winner(0, 3, Player.ONE), Player.ONE)
        self.assertEqual(self.board.find_winner(3, 0, Player.ONE), Player.ONE)

    def test_runs_on_both_sides_are_not_combined(self):
        for col in (0, 1, 3):
            self.board.place(Player.ONE, col)
        row = self.board.place(Player.ONE, 2)
        self.assertEqual(self.board.find_consecutive_tiles(row, 2, Player.ONE)[2], 1)
        self.assertEqual(self.board.find_consecutive_tiles(row, 2, Player.ONE)[5], 2)
        self.assertEqual(self.board.find_winner(row, 2, Player.ONE), Player.EMPTY)

    def test_full_board_without_winner(self):
        fill_without_winner(self.board, last_cell=False)
        self.assertFalse(self.board.is_full)

        player = draw_pattern(ROWS - 1, COLS - 1)
        row = self.board.place(player, COLS - 1)
        self.assertEqual(row, ROWS - 1)
        self.assertEqual(self.board.find_winner(row, COLS - 1, player), Player.EMPTY)
        self.assertTrue(self.board.is_full)
        self.assertEqual(self.board.get_valid_moves(), [])

    def test_no_cell_of_patterned_fill_reports_a_winner(self):
        fill_without_winner(self.board)
        for row in range(ROWS):
            for col in range(COLS):
                player = self.board.get_cell(row, col)
                self.assertEqual(self.board.find_winner(row, col, player), Player.EMPTY)


class TestRender(unittest.TestCase):
    def test_empty_board(self):
        lines = Board().render().split("\n")
        self.assertEqual(lines[0], "|1|2|3|4|5|6|7")
        self.assertEqual(len(lines), ROWS + 1)
        self.assertTrue(all(line == "| " * COLS for line in lines[1:]))

    def test_pieces_render_bottom_up(self):
        board = Board()
        board.place(Player.ONE, 0)
        board.place(Player.TWO, 0)
        board.place(Player.TWO, 6)
        lines = str(board).split("\n")
        self.assertEqual(lines[-1], "|X| | | | | |O")
        self.assertEqual(lines[-2], "|O| | | | | | ")


if __name__ == "__main__":
    unittest.main()
