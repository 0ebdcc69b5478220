"""
rules.py - Game session and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, the turn-by-turn session a driver uses to play a human
   against the automated player
2. ConnectFourEnv, a gymnasium environment where the agent plays against
   the same automated player
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Optional, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connectfour.debug import debug
from connectfour.utils import ROWS, COLS, Player, IllegalMoveError
from connectfour.game.board import Board


@dataclass(frozen=True)
class MoveResult:
    """Where a move landed and whether it won the game."""
    player: Player
    row: int
    column: int
    winner: Player = Player.EMPTY

    @property
    def is_win(self) -> bool:
        return self.winner != Player.EMPTY


class ConnectFourGame:
    """
    A human (Player.ONE) against the automated player (Player.TWO).

    The session owns its board; a driver calls play_human and then
    play_computer with the human's landing cell until is_game_over().
    """

    def __init__(self, board: Optional[Board] = None):
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = board if board is not None else Board()
        self.reset()

    def reset(self) -> None:
        """Empty the board and start a new game."""
        debug.debug("Resetting game", "game")
        self.board.reset()
        self.turn_count = 0
        self.winner = Player.EMPTY
        self.full_board = False

    def _record(self, player: Player, row: int, column: int) -> MoveResult:
        self.turn_count += 1
        winner = self.board.find_winner(row, column, player)
        if winner != Player.EMPTY:
            self.winner = winner
        self.full_board = self.board.is_full
        if self.full_board and winner == Player.EMPTY:
            debug.info("Board is full with no winner", "game")
        return MoveResult(player, row, column, winner)

    def _check_in_progress(self):
        if self.is_game_over():
            raise IllegalMoveError("The game is over")

    def play_human(self, column: int) -> MoveResult:
        """
        Play the human's piece in a column.

        Raises:
            OutOfRangeError: If the column is outside the board
            IllegalMoveError: If the column is full or the game is over
        """
        self._check_in_progress()
        row = self.board.place(Player.ONE, column)
        debug.debug(f"Human played column {column}, landed on row {row}", "game")
        return self._record(Player.ONE, row, column)

    def play_computer(self, row: int, column: int) -> MoveResult:
        """Answer the human move that landed at (row, column)."""
        self._check_in_progress()
        reply = self.board.compute_automated_move(row, column, Player.ONE)
        reply_row = self.board.column_height(reply) - 1
        debug.debug(f"Computer played column {reply}, landed on row {reply_row}", "game")
        return self._record(Player.TWO, reply_row, reply)

    def is_game_over(self) -> bool:
        return self.winner != Player.EMPTY or self.full_board

    def get_winner(self) -> Optional[Player]:
        """The winning player, or None while undecided or on a draw."""
        return None if self.winner == Player.EMPTY else self.winner

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Player.ONE; each agent move is answered by the
    automated player's heuristic.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None):
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)
        # 6x7 board with values 0 (empty), 1 (agent) and 2 (opponent)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.game = ConnectFourGame()
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    @property
    def board(self) -> Board:
        return self.game.board

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """Start a new game and return the initial observation."""
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column, then the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if self.game.is_game_over() or not 0 <= action < COLS or not self.board.can_place(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        move = self.game.play_human(action)
        if move.is_win:
            reward = self.reward_win
        elif not self.game.full_board:
            reply = self.game.play_computer(move.row, move.column)
            if reply.is_win:
                reward = self.reward_lose

        terminated = self.game.is_game_over()
        if terminated and self.game.winner == Player.EMPTY:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            'valid_moves': self.board.get_valid_moves(),
            'turn_count': self.game.turn_count,
            'winner': self.game.winner.name,
            'full_board': self.game.full_board,
        }
