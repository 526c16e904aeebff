from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np


class PieceKind(IntEnum):
    T = 1
    I = 2
    O = 3
    L = 4
    J = 5
    S = 6
    Z = 7


Shape = np.ndarray


BASE_SHAPES = {
    PieceKind.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    PieceKind.I: np.array([[2, 2, 2, 2]], dtype=np.int8),
    PieceKind.O: np.array([[3, 3], [3, 3]], dtype=np.int8),
    PieceKind.L: np.array([[4, 0, 0], [4, 4, 4]], dtype=np.int8),
    PieceKind.J: np.array([[0, 0, 5], [5, 5, 5]], dtype=np.int8),
    PieceKind.S: np.array([[0, 6, 6], [6, 6, 0]], dtype=np.int8),
    PieceKind.Z: np.array([[7, 7, 0], [0, 7, 7]], dtype=np.int8),
}


@dataclass(frozen=True, eq=False)
class Piece:
    kind: PieceKind
    matrix: Shape
    x: int
    y: int

    @property
    def width(self) -> int:
        return int(self.matrix.shape[1])

    @property
    def height(self) -> int:
        return int(self.matrix.shape[0])

    def moved(self, dx: int = 0, dy: int = 0) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def with_matrix(self, matrix: Shape) -> "Piece":
        return replace(self, matrix=matrix)

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) positions of the filled cells."""
        cells: List[Tuple[int, int]] = []
        for dy in range(self.height):
            for dx in range(self.width):
                if self.matrix[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells


class PieceBag:
    """7-bag randomizer: each kind once per bag, drawn from the back."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random(seed)
        self.items: List[PieceKind] = []

    def __len__(self) -> int:
        return len(self.items)

    def refill(self) -> None:
        kinds = list(PieceKind)
        self.rng.shuffle(kinds)
        self.items = kinds

    def pop(self) -> PieceKind:
        if not self.items:
            self.refill()
        return self.items.pop()


class PieceFactory:
    def __init__(self, cols: int) -> None:
        self.cols = int(cols)

    @staticmethod
    def shape_for(kind: PieceKind) -> Shape:
        assert kind in BASE_SHAPES, f"unknown piece kind {kind!r}"
        return BASE_SHAPES[kind].copy()

    def spawn(self, kind: PieceKind) -> Piece:
        matrix = self.shape_for(kind)
        x = self.cols // 2 - matrix.shape[1] // 2
        return Piece(kind=PieceKind(kind), matrix=matrix, x=x, y=0)

    @staticmethod
    def next_from_bag(bag: PieceBag) -> PieceKind:
        return bag.pop()

    def next_piece(self, bag: PieceBag) -> Piece:
        return self.spawn(self.next_from_bag(bag))
