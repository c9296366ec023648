from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size 2D grid of locked cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values correspond to tetromino indices. Row 0 is the top row.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        # Rows above the top edge are allowed while a piece is still entering.
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and self.grid[y, x] != 0:
                return False
        return True

    def lock(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write cells with `value`, clear full rows and return how many were cleared."""
        for x, y in cells:
            if y >= 0:
                self.grid[y, x] = value
        return self._clear_full_lines()

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def _clear_full_lines(self) -> int:
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                self.grid[y].fill(0)
                # Shift everything above down by one; row 0 becomes empty.
                self.grid[1 : y + 1] = self.grid[0:y].copy()
                self.grid[0].fill(0)
                cleared += 1
                # Re-examine the same index, a full row may have moved into it.
                continue
            y -= 1
        return cleared

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
