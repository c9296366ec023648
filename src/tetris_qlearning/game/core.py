from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .rules import ScoringRules


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    HARD_DROP = 3


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


class TetrisGame:
    """One falling-piece session.

    Every non-drop step is followed by one gravity shift, so the piece moves
    down at most one row per step unless it is hard-dropped.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False
        self.current_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0
        self._last_lines = 0
        self.reset()

    def reset(self) -> None:
        self.grid.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False
        self._spawn_piece()

    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece(kind=kind, rotation=0)

    def _spawn_piece(self) -> None:
        self.current_piece = self._random_piece()
        s = self.current_piece.shape()
        h, w = s.shape
        self.current_x = self.grid.width // 2 - w // 2
        self.current_y = 0
        # Immediate collision check: if overlaps, game over
        if not self.grid.can_place(self.current_piece.cells_at(self.current_x, self.current_y)):
            self.game_over = True

    def fits(self, piece: Piece, x: int, y: int) -> bool:
        return self.grid.can_place(piece.cells_at(x, y))

    def _move(self, dx: int, dy: int) -> bool:
        if self.current_piece is None:
            return False
        new_x = self.current_x + dx
        new_y = self.current_y + dy
        if self.fits(self.current_piece, new_x, new_y):
            self.current_x = new_x
            self.current_y = new_y
            return True
        return False

    def _rotate(self) -> None:
        if self.current_piece is None:
            return
        rotated = self.current_piece.rotated()
        if self.fits(rotated, self.current_x, self.current_y):
            self.current_piece = rotated

    def _lock_piece(self) -> int:
        assert self.current_piece is not None
        value = int(self.current_piece.kind)
        lines = self.grid.lock(self.current_piece.cells_at(self.current_x, self.current_y), value)
        self.pieces_placed += 1
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines)
        self._last_lines = lines
        self._spawn_piece()
        return lines

    def _apply_gravity(self) -> None:
        if not self._move(0, 1):
            self._lock_piece()

    def hard_drop(self) -> None:
        if self.current_piece is None:
            return
        # Drop until collision
        while self._move(0, 1):
            pass
        self._lock_piece()

    def step(self, action: Action | int) -> Tuple[np.ndarray, int, bool, dict]:
        action = Action(action)
        if self.game_over:
            return self.board, 0, True, self._info()

        score_before = self.score
        self._last_lines = 0
        if action == Action.HARD_DROP:
            self.hard_drop()
        else:
            if action == Action.LEFT:
                self._move(-1, 0)
            elif action == Action.RIGHT:
                self._move(1, 0)
            elif action == Action.ROTATE_CW:
                self._rotate()
            self._apply_gravity()

        points = self.score - score_before
        return self.board, points, self.game_over, self._info()

    def _info(self) -> dict:
        return {
            "score": self.score,
            "lines_cleared": self._last_lines,
            "lines_cleared_total": self.lines_cleared_total,
            "pieces_placed": self.pieces_placed,
        }

    def current_cells(self) -> List[Tuple[int, int]]:
        if self.current_piece is None:
            return []
        return self.current_piece.cells_at(self.current_x, self.current_y)

    @property
    def board(self) -> np.ndarray:
        """Copy of the locked cells; the falling piece is not included."""
        return self.grid.clone_state()
