"""Gymnasium environment for the tabular Q-learning Tetris agent."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the 10x20 falling-piece environment (4 discrete actions)
register(
    id="TetrisQ-10x20-v0",
    entry_point="tetris_qlearning.env.tetris_env:TetrisEnv",
)

__all__ = ["TetrisQ-10x20-v0"]
