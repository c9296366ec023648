from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logger(*, name: str, use_rich: bool = True, level: str = "info") -> logging.Logger:
    logger = logging.getLogger(str(name))
    logger.handlers.clear()
    logger.propagate = False

    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(lvl)

    handler: logging.Handler
    if use_rich:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(message)s"))

    logger.addHandler(handler)
    return logger


__all__ = ["setup_logger"]
