from __future__ import annotations

import numpy as np


EMPTY = 0
MAX_CELL_VALUE = 7


class GameGrid:
    """Fixed-size board of cells.

    The grid uses 0 for empty cells and 1..7 for filled cells. The value is
    the id of the piece kind that filled the cell, used only for coloring.
    Indexing is (x, y) with y=0 as the top row.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @property
    def cols(self) -> int:
        return self.width

    @property
    def rows(self) -> int:
        return self.height

    def reset(self) -> None:
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_index(self, x: int, y: int) -> None:
        # numpy would silently wrap negative indices
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def cell_at(self, x: int, y: int) -> int:
        self._check_index(x, y)
        return int(self.grid[y, x])

    def set_cell(self, x: int, y: int, value: int) -> None:
        self._check_index(x, y)
        if not EMPTY <= value <= MAX_CELL_VALUE:
            raise ValueError(f"cell value must be in 0..{MAX_CELL_VALUE}, got {value}")
        self.grid[y, x] = value

    def is_row_full(self, y: int) -> bool:
        self._check_index(0, y)
        return bool(np.all(self.grid[y] != EMPTY))

    def take_row(self, y: int) -> np.ndarray:
        """Remove row `y` and return it.

        The grid is one row short until `insert_row_at_top` is called.
        """
        if not 0 <= y < self.grid.shape[0]:
            raise IndexError(f"row {y} outside grid of {self.grid.shape[0]} rows")
        row = self.grid[y].copy()
        self.grid = np.delete(self.grid, y, axis=0)
        return row

    def insert_row_at_top(self, row: np.ndarray) -> None:
        """Insert `row` at y=0, cleared to empty cells."""
        assert row.shape == (self.width,), f"row must have {self.width} cells, got {row.shape}"
        assert self.grid.shape[0] < self.height, "grid already has all of its rows"
        fresh = np.zeros((1, self.width), dtype=np.int8)
        self.grid = np.vstack((fresh, self.grid))

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
