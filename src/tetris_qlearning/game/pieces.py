from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    S = 6
    Z = 7


Shape = np.ndarray


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise: new[j][n-1-i] = old[i][j]."""
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
}


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    rotation: int = 0  # 0..3, clockwise quarter turns

    def shape(self) -> Shape:
        shape = BASE_SHAPES[self.kind]
        for _ in range(self.rotation % 4):
            shape = rotate_cw(shape)
        return shape

    def rotated(self) -> "Piece":
        return Piece(self.kind, (self.rotation + 1) % 4)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells
