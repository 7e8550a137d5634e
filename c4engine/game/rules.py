"""
rules.py - Turn management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which plays full turns (drop, win check, draw check,
   turn change) for a human against the heuristic opponent
2. ConnectFourEnv, a gymnasium environment in which the agent plays the
   first side and the heuristic opponent answers
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from c4engine.ai.heuristic import HeuristicPlayer
from c4engine.debug import debug
from c4engine.errors import EngineError, GameAlreadyOverError, NotHumanTurnError
from c4engine.game.engine import Engine
from c4engine.utils import ROWS, COLS, EMPTY, GameStatus, Side


def play_turn(engine: Engine, column: int) -> int:
    """
    Play one complete turn in ``column`` for the side to move.

    Returns:
        The landing row

    Raises:
        EngineError: if the drop is rejected; the engine is unchanged
    """
    row = engine.drop(column)
    if not engine.check_win() and not engine.check_draw():
        engine.advance_side()
    return row


class ConnectFourGame:
    """
    A human-versus-heuristic game session.

    The session owns its engine. Rendering and input live in the interface
    that drives it.
    """

    def __init__(self, human_side: Side = Side.FIRST, rows: int = ROWS, cols: int = COLS):
        debug.debug("Initializing ConnectFourGame", "game")
        self.engine = Engine(rows, cols)
        self.human_side = human_side
        self.ai = HeuristicPlayer(human_side.other())

    def reset(self) -> None:
        debug.debug("Resetting game", "game")
        self.engine.reset()

    def is_human_turn(self) -> bool:
        return not self.is_game_over() and self.engine.current_side == self.human_side

    def human_move(self, column: int) -> int:
        """
        Play the human's disc in ``column``.

        Raises:
            EngineError: if it is not the human's turn to move in a live
                game, or the column cannot be played
        """
        if self.engine.status.is_game_over():
            raise GameAlreadyOverError(self.engine.status, column)
        if self.engine.current_side != self.human_side:
            raise NotHumanTurnError(self.engine.current_side)

        debug.debug(f"Human plays column {column}", "game")
        return play_turn(self.engine, column)

    def ai_move(self) -> Optional[int]:
        """
        Let the heuristic opponent play its turn.

        Returns:
            The column played, or None if there was nothing to play
        """
        if self.engine.current_side != self.ai.side:
            return None

        column = self.ai.get_move(self.engine)
        if column is None:
            return None

        play_turn(self.engine, column)
        debug.debug(f"AI plays column {column}", "game")
        return column

    def undo_last_turn(self) -> bool:
        """
        Take back the opponent's reply and the human's move before it.

        Nothing happens unless at least two moves have been played.

        Returns:
            True if two moves were undone
        """
        if self.engine.move_count < 2:
            debug.debug("Fewer than two moves recorded; nothing undone", "game")
            return False

        self.engine.undo()
        self.engine.undo()
        return True

    def is_game_over(self) -> bool:
        return self.engine.status.is_game_over()

    def get_winner(self) -> Optional[Side]:
        return self.engine.status.winner

    def get_current_player(self) -> Side:
        return self.engine.current_side

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.engine.available_columns()

    def status_text(self) -> str:
        """One-line description of whose turn it is or how the game ended."""
        status = self.engine.status
        if status == GameStatus.DRAW:
            return "It's a draw!"
        winner = status.winner
        if winner is not None:
            who = "You" if winner == self.human_side else "AI"
            return f"{winner.label.capitalize()} wins! ({who})"

        side = self.engine.current_side
        who = "You" if side == self.human_side else "AI"
        return f"{side.label.capitalize()}'s turn ({who})"

    def render(self) -> str:
        return self.engine.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Side.FIRST. After each of its moves the heuristic
    opponent replies as Side.SECOND within the same step.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, rows: int = ROWS, cols: int = COLS):
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(cols)
        # Observation: grid of 0 (empty), 1 (agent) and 2 (opponent)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)

        self.engine = Engine(rows, cols)
        self.opponent = HeuristicPlayer(Side.SECOND)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.engine.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's move and the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            play_turn(self.engine, int(action))
        except EngineError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if not self.engine.status.is_game_over():
            column = self.opponent.get_move(self.engine)
            if column is not None:
                play_turn(self.engine, column)
                debug.trace(f"Opponent replied in column {column}", "env")

        reward = self.reward_step
        terminated = False
        status = self.engine.status
        if status == GameStatus.FIRST_WIN:
            debug.info("Game over: agent wins", "env")
            reward, terminated = self.reward_win, True
        elif status == GameStatus.SECOND_WIN:
            debug.info("Game over: opponent wins", "env")
            reward, terminated = self.reward_lose, True
        elif status == GameStatus.DRAW:
            debug.info("Game over: draw", "env")
            reward, terminated = self.reward_draw, True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def action_masks(self) -> np.ndarray:
        """Boolean mask of playable columns."""
        mask = np.zeros(self.engine.cols, dtype=bool)
        if not self.engine.status.is_game_over():
            mask[self.engine.available_columns()] = True
        return mask

    def _get_observation(self) -> np.ndarray:
        return self.engine.get_state()

    def _get_info(self) -> Dict[str, Any]:
        grid = self.engine.get_state()
        valid_moves = [] if self.engine.status.is_game_over() else self.engine.available_columns()
        return {
            'valid_moves': valid_moves,
            'current_player': self.engine.current_side.value,
            'game_result': self.engine.status.name,
            'moves_made': self.engine.move_count,
            'empty_cells': int(np.sum(grid == EMPTY)),
            'winning_line': self.engine.get_winning_line(),
            'last_move': self.engine.last_move,
        }
