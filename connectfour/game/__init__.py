"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board engine, the game session and the
Gymnasium environment.
"""

from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame, ConnectFourEnv, MoveResult

__all__ = ['Board', 'ConnectFourGame', 'ConnectFourEnv', 'MoveResult']
