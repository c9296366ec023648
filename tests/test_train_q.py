from __future__ import annotations

import logging

from rich.logging import RichHandler

from tetris_qlearning.rl.train_q import build_parser, train_q_learning
from tetris_qlearning.utils.logging import setup_logger


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.episodes == 10_000
    assert args.epsilon == 0.1
    assert args.alpha == 0.1
    assert args.gamma == 0.99
    assert args.log_every == 100
    assert args.max_steps is None


def test_parser_reads_flags() -> None:
    args = build_parser().parse_args(["--episodes", "20", "--seed", "4", "--max-steps", "300", "--log-level", "debug"])
    assert (args.episodes, args.seed, args.max_steps, args.log_level) == (20, 4, 300, "debug")


def test_train_q_learning_returns_trained_agent() -> None:
    agent = train_q_learning(episodes=3, seed=0, log_every=1, max_episode_steps=300, log_level="warning")
    assert len(agent) > 0


def test_setup_logger_uses_rich_handler() -> None:
    logger = setup_logger(name="tetris_qlearning.test.rich", level="debug")
    assert logger.level == logging.DEBUG
    assert not logger.propagate
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_setup_logger_plain_handler_and_idempotent() -> None:
    setup_logger(name="tetris_qlearning.test.plain", use_rich=False)
    logger = setup_logger(name="tetris_qlearning.test.plain", use_rich=False, level="bogus")
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], RichHandler)
    assert logger.level == logging.INFO
