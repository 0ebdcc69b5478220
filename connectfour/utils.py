"""
utils.py - Constants, enumerations and helpers for the Connect Four engine

Row 0 is the bottom row of the board; columns are numbered 0 to COLS-1 from
the left.
"""

from enum import Enum
from typing import Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
MAX_RUN = CONNECT_N - 1  # Steps scanned outward from a placed tile

DEFAULT_MOVE_DELAY = 1.3  # Seconds between moves in the interactive shell


class ConnectFourError(Exception):
    """Base class for engine errors."""


class OutOfRangeError(ConnectFourError, IndexError):
    """A row or column index lies outside the board."""


class IllegalMoveError(ConnectFourError, ValueError):
    """A move was requested that the board cannot accept."""


class NoValidDirectionError(ConnectFourError, RuntimeError):
    """The automated move heuristic could not score any direction."""


class Player(Enum):
    """Players, also used as the state of a board cell."""
    EMPTY = 0
    ONE = 1    # Human player
    TWO = 2    # Automated player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def symbol(self) -> str:
        return CELL_SYMBOLS[self]

    def __str__(self):
        return self.symbol


CELL_SYMBOLS = {
    Player.EMPTY: " ",
    Player.ONE: "X",
    Player.TWO: "O",
}


class Direction(Enum):
    """
    The eight scan directions around a cell, as (row delta, column delta).

    Member order is significant: the direction at index i and the one at
    index 7 - i point opposite ways along the same line, so every line
    through a cell is covered once in each orientation.
    """
    UP = (1, 0)
    DOWN_RIGHT = (-1, 1)
    RIGHT = (0, 1)
    UP_RIGHT = (1, 1)
    DOWN_LEFT = (-1, -1)
    LEFT = (0, -1)
    UP_LEFT = (1, -1)
    DOWN = (-1, 0)

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def dc(self) -> int:
        return self.value[1]

    @property
    def index(self) -> int:
        """Position of this direction in SCAN_ORDER."""
        return SCAN_ORDER.index(self)

    def opposite(self) -> 'Direction':
        """The antiparallel direction, at index 7 - index."""
        return opposite_index(self.index)

    def step(self, row: int, col: int, distance: int = 1) -> Tuple[int, int]:
        """Cell reached by moving `distance` steps from (row, col)."""
        return row + self.dr * distance, col + self.dc * distance


SCAN_ORDER: Tuple[Direction, ...] = tuple(Direction)


def opposite_index(index: int) -> Direction:
    """Return the direction antiparallel to SCAN_ORDER[index]."""
    return SCAN_ORDER[len(SCAN_ORDER) - 1 - index]


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= row < rows and 0 <= col < cols


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid as text.

    The first line numbers the columns from 1; the remaining lines show the
    rows from the top of the board down to row 0.

    Args:
        grid: Board grid indexed [row, col] with row 0 at the bottom

    Returns:
        The rendered board
    """
    rows, cols = grid.shape
    lines = ["".join(f"|{col + 1}" for col in range(cols))]

    for row in range(rows - 1, -1, -1):
        lines.append("".join(f"|{Player(int(grid[row, col])).symbol}" for col in range(cols)))

    return "\n".join(lines)
