"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which holds the grid, places moves
with gravity, detects four-in-a-row by scanning outward from a placed tile,
and picks the automated player's reply with a single-ply blocking heuristic.
"""

from typing import List, Optional

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (ROWS, COLS, MAX_RUN, Player, Direction, SCAN_ORDER,
                               IllegalMoveError, NoValidDirectionError, OutOfRangeError,
                               is_valid_position, opposite_index, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    The grid is indexed [row, col] with row 0 at the bottom. A column's
    height is also the row where its next piece lands.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        """Initialize an empty board."""
        debug.debug(f"Initializing new {rows}x{cols} Board", "board")
        self.rows = rows
        self.cols = cols
        self.reset()

    def reset(self):
        """Empty every cell and clear the placement count."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((self.rows, self.cols), dtype=int)
        self.moves_made: List[int] = []

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        new_board.moves_made = self.moves_made.copy()
        return new_board

    @property
    def is_full(self) -> bool:
        """True once every cell has been played."""
        return len(self.moves_made) >= self.rows * self.cols

    def _check_column(self, col: int):
        if not 0 <= col < self.cols:
            raise OutOfRangeError(f"Column {col} is outside the board (0-{self.cols - 1})")

    def _check_position(self, row: int, col: int):
        if not is_valid_position(row, col, self.rows, self.cols):
            raise OutOfRangeError(f"Position ({row}, {col}) is outside the board")

    def get_cell(self, row: int, col: int) -> Player:
        """Return the state of the cell at (row, col)."""
        self._check_position(row, col)
        return Player(int(self.grid[row, col]))

    def column_height(self, col: int) -> int:
        """
        Count the filled cells at the bottom of a column.

        Args:
            col: The column to measure (0-indexed)

        Returns:
            Number of pieces in the column, between 0 and the board height
        """
        self._check_column(col)
        height = 0
        while height < self.rows and self.grid[height, col] != Player.EMPTY.value:
            height += 1
        return height

    def can_place(self, col: int) -> bool:
        """True if the column still has room for a piece."""
        return self.column_height(col) < self.rows

    def get_valid_moves(self) -> List[int]:
        """Columns that can still accept a piece."""
        return [col for col in range(self.cols) if self.can_place(col)]

    def place(self, player: Player, col: int) -> int:
        """
        Drop a piece for `player` into a column.

        Args:
            player: Player.ONE or Player.TWO
            col: The column to play (0-indexed)

        Returns:
            The row the piece landed in

        Raises:
            OutOfRangeError: If the column is outside the board
            IllegalMoveError: If the column is full or the player is not ONE or TWO
        """
        if not isinstance(player, Player) or player == Player.EMPTY:
            raise IllegalMoveError(f"Cannot place a piece for {player!r}")

        if not self.can_place(col):
            debug.debug(f"Rejected move for {player.name} in full column {col}", "board")
            raise IllegalMoveError(f"Column {col + 1} is already full")

        row = self.column_height(col)
        self.grid[row, col] = player.value
        self.moves_made.append(col)
        debug.trace(f"{player.name} placed at ({row}, {col})", "board")
        return row

    def count_run(self, row: int, col: int, player: Player, direction: Direction) -> int:
        """
        Count consecutive `player` tiles leading away from (row, col).

        The starting cell itself is not counted and at most MAX_RUN cells are
        examined.
        """
        count = 0
        for distance in range(1, MAX_RUN + 1):
            r, c = direction.step(row, col, distance)
            if not is_valid_position(r, c, self.rows, self.cols) or self.grid[r, c] != player.value:
                break
            count += 1
        return count

    def find_consecutive_tiles(self, row: int, col: int, player: Player) -> List[int]:
        """Run lengths around (row, col) for every direction, in SCAN_ORDER."""
        self._check_position(row, col)
        return [self.count_run(row, col, player, direction) for direction in SCAN_ORDER]

    def find_winner(self, row: int, col: int, player: Player) -> Player:
        """
        Check whether the tile at (row, col) completed four in a row.

        A win is reported only when a single direction holds MAX_RUN matching
        tiles beyond the placed one; runs split across both sides of the
        placed tile are not combined.

        Returns:
            `player` if a winning run was found, otherwise Player.EMPTY
        """
        counts = self.find_consecutive_tiles(row, col, player)
        if any(count >= MAX_RUN for count in counts):
            debug.info(f"{player.name} has four in a row through ({row}, {col})", "board")
            return player
        return Player.EMPTY

    def compute_automated_move(self, row: int, col: int, player: Player = Player.ONE) -> int:
        """
        Reply to the move `player` just made at (row, col).

        The reply blocks the far end of the longest run through the placed
        tile: it targets the cell one step past the run in the opposite
        direction. If that column is off the board or full, it retreats one
        step short instead, and failing that plays the open column nearest
        to `col`. The automated piece belongs to `player.other()`.

        Returns:
            The column the automated player played

        Raises:
            IllegalMoveError: If the board has no open column
            NoValidDirectionError: If no direction could be scored
        """
        debug.start_timer("automated_move")
        try:
            counts = self.find_consecutive_tiles(row, col, player)

            max_count = -1
            best_index = -1
            for index, count in enumerate(counts):
                if count > max_count:
                    max_count = count
                    best_index = index

            if best_index == -1:
                raise NoValidDirectionError("No direction could be scored")

            blocking = opposite_index(best_index)
            run = counts[blocking.index]
            debug.debug(f"Longest run {max_count} towards {SCAN_ORDER[best_index].name}, "
                        f"blocking towards {blocking.name}", "heuristic")

            target = self._blocking_column(col, blocking, run)
            self.place(player.other(), target)
        finally:
            debug.end_timer("automated_move", "heuristic")
        return target

    def _blocking_column(self, col: int, blocking: Direction, run: int) -> int:
        for distance in (run + 1, run - 1):
            _, target = blocking.step(0, col, distance)
            if 0 <= target < self.cols and self.can_place(target):
                return target
            debug.debug(f"Column {target} unavailable for blocking", "heuristic")

        fallback = self._nearest_open_column(col)
        if fallback is None:
            raise IllegalMoveError("The board is full")
        return fallback

    def _nearest_open_column(self, col: int) -> Optional[int]:
        for offset in range(self.cols):
            for target in (col - offset, col + offset):
                if 0 <= target < self.cols and self.can_place(target):
                    return target
        return None

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as text, top row first."""
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
