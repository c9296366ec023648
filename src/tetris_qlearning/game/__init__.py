"""Game module for the tabular Q-learning Tetris agent.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation, collision test and line clearing
- Piece: Tetromino piece with clockwise rotation
- TetrominoType: Enum of available piece types
- ScoringRules: Line-clear scoring and shaped reward
- TetrisGame: Step function and session state
"""

from .grid import GameGrid
from .pieces import Piece, TetrominoType, rotate_cw
from .rules import ScoringRules
from .core import TetrisGame, GameConfig, Action

__all__ = [
    "GameGrid",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "ScoringRules",
    "TetrisGame",
    "GameConfig",
    "Action",
]
