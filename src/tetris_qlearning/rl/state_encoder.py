from __future__ import annotations

from typing import List, NamedTuple, Sequence, Tuple

import numpy as np


class StateKey(NamedTuple):
    """Lossy board signature used as the Q-table key.

    Boards with equal heights, holes and bumpiness share a key.
    """

    heights: Tuple[int, ...]
    holes: int
    bumpiness: int

    def __str__(self) -> str:
        return ",".join(str(h) for h in self.heights) + f"|{self.holes}|{self.bumpiness}"


def column_heights(grid: np.ndarray) -> List[int]:
    # Height of a column is the number of occupied cells in it.
    return [int(h) for h in np.count_nonzero(grid, axis=0)]


def count_holes(grid: np.ndarray) -> int:
    holes = 0
    for x in range(grid.shape[1]):
        column = grid[:, x]
        seen_block = False
        for cell in column:
            if cell != 0:
                seen_block = True
            elif seen_block:
                holes += 1
    return holes


def bumpiness(heights: Sequence[int]) -> int:
    return int(sum(abs(heights[i] - heights[i + 1]) for i in range(len(heights) - 1)))


def total_height(grid: np.ndarray) -> int:
    return int(sum(column_heights(grid)))


def encode_state(grid: np.ndarray) -> StateKey:
    heights = column_heights(grid)
    return StateKey(tuple(heights), count_holes(grid), bumpiness(heights))
