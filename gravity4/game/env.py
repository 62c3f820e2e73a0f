"""
env.py - Gymnasium environment for gravity Connect Four

The agent plays one side of a GameSession; the session's automated player
answers every move. Each step settles the session completely, so the
returned observation is always the agent's next decision point (or the end
of the game).
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from gravity4.config import SessionConfig
from gravity4.debug import debug
from gravity4.game.session import GameSession
from gravity4.utils import ROWS, COLS, GameStatus, Gravity, is_valid_column


class GravityConnectFourEnv(gym.Env):
    """
    Gravity Connect Four following the Gymnasium interface.

    Observation:
        board: ROWS x COLS int8 grid (0 empty, 1 Player.ONE, 2 Player.TWO)
        gravity: 0 for Gravity.DOWN, 1 for Gravity.UP
    Action:
        Column index to drop a piece into
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    reward_win = 1.0
    reward_lose = -1.0
    reward_draw = 0.1
    reward_invalid_move = -0.5
    reward_step = -0.01  # Small negative reward to encourage faster wins

    def __init__(self, render_mode: Optional[str] = None,
                 config: Optional[SessionConfig] = None, opponent=None):
        debug.debug("Initializing GravityConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        config = config or SessionConfig(ai_enabled=True)
        if not config.ai_enabled:
            raise ValueError("The environment needs the session's automated player enabled")

        self.render_mode = render_mode
        self.session = GameSession(config, ai=opponent)
        self.agent = self.session.ai.player.other()

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Dict({
            'board': spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8),
            'gravity': spaces.Discrete(2),
        })

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict[str, Any]] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Start a new game. Scores carry over between episodes.

        Args:
            seed: Seeds the environment and the opponent's random source
            options: {"auto_gravity": bool} switches automatic flips
        """
        super().reset(seed=seed)
        if seed is not None:
            self.session.ai.rng.seed(seed)
        if options and 'auto_gravity' in options:
            self.session.set_auto_gravity(options['auto_gravity'])

        self.session.reset_board()
        self.session.run_pending()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[Dict[str, Any], float, bool, bool, Dict[str, Any]]:
        """
        Drop the agent's piece and let the opponent answer.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if self.session.status.is_game_over():
            raise RuntimeError("step() called after the game ended; call reset()")

        if not is_valid_column(action) or not self.session.select_column(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.session.run_pending()

        status = self.session.status
        terminated = status.is_game_over()
        if status == GameStatus.DRAW:
            reward = self.reward_draw
        elif status.winner == self.agent:
            reward = self.reward_win
        elif status.winner is not None:
            reward = self.reward_lose
        else:
            reward = self.reward_step
        if terminated:
            debug.info(f"Game over: {status.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.session.render()
        if self.render_mode == "human":
            print(self.session.render())
        return None

    def _get_observation(self) -> Dict[str, Any]:
        return {
            'board': self.session.board.get_state().astype(np.int8),
            'gravity': 0 if self.session.gravity == Gravity.DOWN else 1,
        }

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.session.valid_columns()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.session.turn.value,
            'game_result': self.session.status.name,
            'gravity': self.session.gravity.name,
            'moves_made': self.session.board.piece_count(),
            'last_move': self.session.last_move,
            'scores': {player.name: score for player, score in self.session.scores.items()},
        }

    def close(self):
        self.session.scheduler.cancel_all()
