from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Hashable, Optional

import numpy as np


QTable = Dict[Hashable, np.ndarray]


@dataclass
class AgentConfig:
    epsilon: float = 0.1
    alpha: float = 0.1
    gamma: float = 0.99
    n_actions: int = 4

    def __post_init__(self) -> None:
        if not 0.0 <= self.epsilon <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {self.epsilon}")
        if not 0.0 < self.alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {self.alpha}")
        if not 0.0 <= self.gamma <= 1.0:
            raise ValueError(f"gamma must be in [0, 1], got {self.gamma}")
        if self.n_actions <= 0:
            raise ValueError(f"n_actions must be > 0, got {self.n_actions}")


class QLearningAgent:
    """Tabular epsilon-greedy Q-learning over encoded board states.

    Unseen states are inserted with a zero value for every action the first
    time they are read or written; entries are never removed.
    """

    def __init__(self, config: Optional[AgentConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or AgentConfig()
        self.rng = rng if rng is not None else random.Random()
        self.q_table: QTable = {}

    def __len__(self) -> int:
        return len(self.q_table)

    def q_values(self, state: Hashable) -> np.ndarray:
        values = self.q_table.get(state)
        if values is None:
            values = np.zeros((self.config.n_actions,), dtype=np.float64)
            self.q_table[state] = values
        return values

    def greedy_action(self, state: Hashable) -> int:
        # np.argmax returns the first index among equal maxima
        return int(np.argmax(self.q_values(state)))

    def select_action(self, state: Hashable) -> int:
        greedy = self.greedy_action(state)
        if self.rng.random() < self.config.epsilon:
            return self.rng.randrange(self.config.n_actions)
        return greedy

    def update(self, state: Hashable, action: int, reward: float, next_state: Hashable) -> float:
        """Apply one Q-learning backup and return the TD error."""
        a = int(action)
        if not 0 <= a < self.config.n_actions:
            raise ValueError(f"action must be in [0, {self.config.n_actions}), got {action}")
        values = self.q_values(state)
        q_next_max = float(np.max(self.q_values(next_state)))
        target = float(reward) + self.config.gamma * q_next_max
        td_error = target - float(values[a])
        values[a] += self.config.alpha * td_error
        return td_error
