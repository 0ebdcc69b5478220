from connectfour.utils import Player


def draw_pattern(row: int, col: int) -> Player:
    """A fill with no more than two equal tiles in a line anywhere."""
    return Player.ONE if (col + 2 * row) % 4 < 2 else Player.TWO


def fill_without_winner(board, last_cell=True):
    """Fill the board row by row; stop before the final cell unless last_cell."""
    cells = [(row, col) for row in range(board.rows) for col in range(board.cols)]
    if not last_cell:
        cells = cells[:-1]
    for row, col in cells:
        board.place(draw_pattern(row, col), col)
