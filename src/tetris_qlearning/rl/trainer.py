from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, runtime_checkable

from tetris_qlearning.env.tetris_env import TetrisEnv
from tetris_qlearning.rl.q_agent import AgentConfig, QLearningAgent
from tetris_qlearning.rl.state_encoder import encode_state


@runtime_checkable
class ProgressSink(Protocol):
    def on_progress(self, episode: int, score: int, total_reward: float) -> None:
        raise NotImplementedError


class NullProgressSink:
    def on_progress(self, episode: int, score: int, total_reward: float) -> None:
        _ = episode
        _ = score
        _ = total_reward


class LoggerProgressSink:
    def __init__(self, logger: logging.Logger, agent: Optional[QLearningAgent] = None) -> None:
        self.logger = logger
        self.agent = agent

    def on_progress(self, episode: int, score: int, total_reward: float) -> None:
        states = len(self.agent) if self.agent is not None else 0
        self.logger.info(
            "[q] episode=%d score=%d reward=%.1f states=%d",
            int(episode),
            int(score),
            float(total_reward),
            states,
        )


@dataclass
class TrainConfig:
    episodes: int = 10_000
    log_every: int = 100
    seed: Optional[int] = None
    max_episode_steps: Optional[int] = None
    agent: AgentConfig = field(default_factory=AgentConfig)

    def __post_init__(self) -> None:
        if self.episodes < 0:
            raise ValueError(f"episodes must be >= 0, got {self.episodes}")
        if self.log_every < 0:
            raise ValueError(f"log_every must be >= 0, got {self.log_every}")
        if self.max_episode_steps is not None and self.max_episode_steps <= 0:
            raise ValueError(f"max_episode_steps must be > 0, got {self.max_episode_steps}")


@dataclass
class EpisodeStats:
    episode: int
    score: int
    total_reward: float
    steps: int
    lines_cleared: int


class QLearningTrainer:
    """Runs episodes sequentially, updating one long-lived agent after every step."""

    def __init__(self, config: Optional[TrainConfig] = None, agent: Optional[QLearningAgent] = None,
                 env: Optional[TetrisEnv] = None, sink: Optional[ProgressSink] = None) -> None:
        self.config = config or TrainConfig()
        seed = self.config.seed
        if agent is None:
            agent_rng = random.Random(None if seed is None else seed + 1)
            agent = QLearningAgent(self.config.agent, rng=agent_rng)
        if env is None:
            env = TetrisEnv(rng=random.Random(seed), max_episode_steps=self.config.max_episode_steps)
        self.agent = agent
        self.env = env
        self.sink: ProgressSink = sink if sink is not None else NullProgressSink()

    def run_episode(self, episode: int) -> EpisodeStats:
        obs, info = self.env.reset()
        state = encode_state(obs)
        total_reward = 0.0
        steps = 0

        while True:
            action = self.agent.select_action(state)
            obs, reward, terminated, truncated, info = self.env.step(action)
            next_state = encode_state(obs)
            self.agent.update(state, action, reward, next_state)
            total_reward += reward
            steps += 1
            state = next_state
            if terminated or truncated:
                break

        return EpisodeStats(
            episode=episode,
            score=int(info["score"]),
            total_reward=total_reward,
            steps=steps,
            lines_cleared=int(info["lines_cleared_total"]),
        )

    def train(self) -> List[EpisodeStats]:
        history: List[EpisodeStats] = []
        every = self.config.log_every
        for ep in range(self.config.episodes):
            stats = self.run_episode(ep)
            history.append(stats)
            if every > 0 and ep % every == 0:
                self.sink.on_progress(ep, stats.score, stats.total_reward)
        return history
