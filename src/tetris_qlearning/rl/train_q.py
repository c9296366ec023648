from __future__ import annotations

import argparse
from typing import Optional

from tetris_qlearning.rl.q_agent import AgentConfig, QLearningAgent
from tetris_qlearning.rl.trainer import LoggerProgressSink, QLearningTrainer, TrainConfig
from tetris_qlearning.utils.logging import setup_logger


def train_q_learning(episodes: int = 10_000, epsilon: float = 0.1, alpha: float = 0.1, gamma: float = 0.99,
                     seed: Optional[int] = None, log_every: int = 100, max_episode_steps: Optional[int] = None,
                     log_level: str = "info") -> QLearningAgent:
    logger = setup_logger(name="tetris_qlearning.train", use_rich=True, level=log_level)
    config = TrainConfig(
        episodes=episodes,
        log_every=log_every,
        seed=seed,
        max_episode_steps=max_episode_steps,
        agent=AgentConfig(epsilon=epsilon, alpha=alpha, gamma=gamma),
    )
    trainer = QLearningTrainer(config)
    trainer.sink = LoggerProgressSink(logger, trainer.agent)
    history = trainer.train()

    if history:
        best = max(history, key=lambda s: s.score)
        logger.info("[q] done episodes=%d best_score=%d states=%d", len(history), best.score, len(trainer.agent))
    return trainer.agent


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Train a tabular Q-learning agent on 10x20 Tetris")
    p.add_argument("--episodes", type=int, default=10_000)
    p.add_argument("--epsilon", type=float, default=0.1)
    p.add_argument("--alpha", type=float, default=0.1)
    p.add_argument("--gamma", type=float, default=0.99)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-every", type=int, default=100)
    p.add_argument("--max-steps", type=int, default=None,
                   help="Truncate episodes after this many steps (default: play until game over)")
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    train_q_learning(
        episodes=args.episodes,
        epsilon=args.epsilon,
        alpha=args.alpha,
        gamma=args.gamma,
        seed=args.seed,
        log_every=args.log_every,
        max_episode_steps=args.max_steps,
        log_level=args.log_level,
    )
    print("Training completed. The learned Q-table is discarded on exit.")


if __name__ == "__main__":  # pragma: no cover
    main()
