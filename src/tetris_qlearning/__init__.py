"""Tabular Q-learning agent for a simplified 10x20 falling-block game."""

__version__ = "0.1.0"
