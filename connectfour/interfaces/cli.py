"""
cli.py - Command-line interface for playing Connect Four

This module provides the interactive shell around the engine: it reads the
human's columns, paces and prints the board, and reports the outcome.
"""

import argparse
import sys
import time
from typing import List, Optional, TextIO

from connectfour.debug import debug, DebugLevel
from connectfour.utils import COLS, DEFAULT_MOVE_DELAY, Player, ConnectFourError, IllegalMoveError
from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame

FULL_COLUMN_WARNING = "This column is already full! Pick a new one to keep playing."


def parse_column(text: str, cols: int = COLS) -> Optional[int]:
    """
    Convert a 1-based column typed by the user into a 0-based index.

    Returns:
        The column index, or None if the input is not a column on the board
    """
    try:
        column = int(text.strip()) - 1
    except ValueError:
        return None
    if not 0 <= column < cols:
        return None
    return column


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, stdin: TextIO = None, stdout: TextIO = None):
        self.game = ConnectFourGame()
        self.args = None
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def parse_args(self, argv: List[str] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Play Connect Four against the computer')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (default: warning)')
        parser.add_argument('--log-file', default=None, help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--delay', type=float, default=DEFAULT_MOVE_DELAY,
                                 help='Seconds to pause before showing each move')

        show_parser = subparsers.add_parser('show', help='Replay columns and print the board')
        show_parser.add_argument('--moves', required=True,
                                 help='Comma-separated 1-based columns, players alternating')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: List[str] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        command = self.args.command or 'play'
        if command == 'play':
            self.play_game(getattr(self.args, 'delay', DEFAULT_MOVE_DELAY))
            return 0
        return self.show_moves(self.args.moves)

    def say(self, message: str = "") -> None:
        print(message, file=self.stdout)

    def pause(self, delay: float) -> None:
        if delay > 0:
            time.sleep(delay)

    def read_column(self) -> Optional[int]:
        line = self.stdin.readline()
        if not line:
            return None
        return parse_column(line, self.game.board.cols)

    def play_game(self, delay: float = DEFAULT_MOVE_DELAY, new_game: bool = True) -> None:
        """
        Play one game; any input that is not a column ends it.

        With new_game=False the session continues from the current board.
        """
        if new_game:
            self.game.reset()
            self.say("Welcome! Let's play Connect Four. Our board is empty to start.")

        while not self.game.is_game_over():
            self.say("Your turn, choose a column")
            column = self.read_column()
            if column is None:
                debug.info("Session ended on non-column input", "cli")
                return

            try:
                move = self.game.play_human(column)
            except IllegalMoveError:
                self.say(FULL_COLUMN_WARNING)
                return

            self.say("Great choice! Let's check out the game board.")
            self.pause(delay)
            self.say(self.game.render())
            if move.is_win:
                self.say("Congrats! You beat me! Game Over.")
                return
            if self.game.full_board:
                break

            reply = self.game.play_computer(move.row, move.column)
            self.say("Now it's my turn, here is my choice.")
            self.pause(delay)
            self.say(self.game.render())
            if reply.is_win:
                self.say("I win! Game Over.")
                return

        self.say("Full board! Game Over.")

    def show_moves(self, moves: str) -> int:
        """Replay alternating moves onto a fresh board and print it."""
        board = Board()
        player = Player.ONE
        try:
            for text in moves.split(','):
                column = parse_column(text, board.cols)
                if column is None:
                    self.say(f"Not a column: {text.strip()!r}")
                    return 1
                row = board.place(player, column)
                if board.find_winner(row, column, player) == player:
                    self.say(f"{player.name} wins at column {column + 1}")
                player = player.other()
        except ConnectFourError as e:
            self.say(f"Invalid move: {e}")
            return 1

        self.say(board.render())
        return 0


def main(argv: List[str] = None) -> int:
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
