from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_line: int = 100
    height_penalty: float = 0.1
    game_over_penalty: float = 500.0

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return self.points_per_line * lines

    def reward(self, score_delta: float, height_delta: float, game_over: bool) -> float:
        """Shaped per-step reward: points gained, minus stack growth, minus game over."""
        reward = float(score_delta) - self.height_penalty * float(height_delta)
        if game_over:
            reward -= self.game_over_penalty
        return reward
