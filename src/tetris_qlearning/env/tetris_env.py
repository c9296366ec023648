from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_qlearning.game import Action, GameConfig, ScoringRules, TetrisGame, TetrominoType
from tetris_qlearning.rl.state_encoder import total_height


class TetrisEnv(gym.Env):
    """Gymnasium view of a falling-piece session with a shaped reward.

    reward = score delta - height_penalty * total height delta
             - game_over_penalty on the step that ends the game
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 rng: Optional[random.Random] = None,
                 max_episode_steps: Optional[int] = None) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self._rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.max_episode_steps = max_episode_steps
        self.game = TetrisGame(self.config, self.rules, rng=self._rng)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Box(low=0, high=int(max(TetrominoType)), shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_placed": self.game.pieces_placed,
            "total_height": total_height(self.game.grid.grid),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)
        # Fresh session per episode; the random source carries over.
        self.game = TetrisGame(self.config, self.rules, rng=self._rng)
        self._steps = 0
        return self.game.board, self._get_info()

    def step(self, action: int):
        action = Action(int(action))

        score_before = self.game.score
        height_before = total_height(self.game.grid.grid)

        obs, points, done, engine_info = self.game.step(action)
        self._steps += 1

        height_after = total_height(self.game.grid.grid)
        terminated = bool(done)
        truncated = bool(
            not terminated
            and self.max_episode_steps is not None
            and self._steps >= self.max_episode_steps
        )

        score_delta = self.game.score - score_before
        height_delta = height_after - height_before
        reward = self.rules.reward(score_delta, height_delta, terminated)

        info = self._get_info()
        info["lines_cleared"] = engine_info["lines_cleared"]
        info["reward_components"] = {
            "score": float(score_delta),
            "height": -self.rules.height_penalty * float(height_delta),
            "terminal": -self.rules.game_over_penalty if terminated else 0.0,
        }
        return obs, float(reward), terminated, truncated, info

    def close(self) -> None:
        pass
