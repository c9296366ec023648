from __future__ import annotations

import random
from collections import Counter

import numpy as np
import pytest

from tetris_qlearning.rl.q_agent import AgentConfig, QLearningAgent


def _agent(epsilon: float = 0.1, seed: int = 0, **kwargs: float) -> QLearningAgent:
    return QLearningAgent(AgentConfig(epsilon=epsilon, **kwargs), rng=random.Random(seed))


def test_defaults() -> None:
    config = AgentConfig()
    assert (config.epsilon, config.alpha, config.gamma, config.n_actions) == (0.1, 0.1, 0.99, 4)


def test_unseen_state_is_inserted_with_zeros() -> None:
    agent = _agent()
    assert len(agent) == 0
    values = agent.q_values("s")
    assert np.array_equal(values, np.zeros(4))
    assert len(agent) == 1
    assert agent.q_values("s") is values


def test_greedy_picks_highest_value() -> None:
    agent = _agent(epsilon=0.0)
    agent.q_values("s")[:] = [0.5, -1.0, 2.0, 1.5]
    assert all(agent.select_action("s") == 2 for _ in range(50))


def test_greedy_breaks_ties_by_first_action() -> None:
    agent = _agent(epsilon=0.0)
    assert agent.select_action("fresh") == 0
    agent.q_values("s")[:] = [1.0, 3.0, 3.0, 0.0]
    assert agent.greedy_action("s") == 1
    assert agent.select_action("s") == 1


def test_full_exploration_is_uniform() -> None:
    agent = _agent(epsilon=1.0, seed=123)
    agent.q_values("s")[:] = [0.0, 0.0, 10.0, 0.0]
    counts = Counter(agent.select_action("s") for _ in range(4000))
    assert set(counts) == {0, 1, 2, 3}
    for action in range(4):
        assert 850 <= counts[action] <= 1150


def test_single_update_matches_rule() -> None:
    agent = _agent()
    agent.q_values("next")[:] = [0.0, 2.0, 0.0, 0.0]
    td = agent.update("s", 3, 1.0, "next")
    assert td == pytest.approx(1.0 + 0.99 * 2.0)
    assert agent.q_values("s")[3] == pytest.approx(0.1 * (1.0 + 0.99 * 2.0))
    assert agent.q_values("s")[:3].tolist() == [0.0, 0.0, 0.0]


def test_update_initialises_next_state() -> None:
    agent = _agent()
    agent.update("s", 0, -1.0, "unseen")
    assert "unseen" in agent.q_table
    assert len(agent) == 2


def test_repeated_update_converges_to_reward() -> None:
    agent = _agent()
    for _ in range(300):
        agent.update("s", 1, 5.0, "terminal")
    assert agent.q_values("s")[1] == pytest.approx(5.0, abs=1e-6)
    assert np.all(agent.q_values("terminal") == 0.0)


@pytest.mark.parametrize("action", [-1, 4])
def test_update_rejects_invalid_action(action: int) -> None:
    with pytest.raises(ValueError, match="action"):
        _agent().update("s", action, 0.0, "t")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"epsilon": -0.1},
        {"epsilon": 1.5},
        {"alpha": 0.0},
        {"gamma": 1.1},
        {"n_actions": 0},
    ],
)
def test_config_rejects_out_of_range_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        AgentConfig(**kwargs)


def test_exploitation_goes_through_greedy_action() -> None:
    class LastActionAgent(QLearningAgent):
        def greedy_action(self, state):
            self.q_values(state)
            return 3

    agent = LastActionAgent(AgentConfig(epsilon=0.0), rng=random.Random(0))
    assert agent.select_action("s") == 3
    assert "s" in agent.q_table


def test_exploration_still_registers_state() -> None:
    agent = _agent(epsilon=1.0)
    agent.select_action("s")
    assert "s" in agent.q_table
