from __future__ import annotations

from .grid import GameGrid
from .pieces import Piece


def collides(grid: GameGrid, piece: Piece) -> bool:
    """True if `piece` leaves the board sideways, reaches past the floor,
    or overlaps a filled cell.

    Cells above the top row (y < 0) are allowed.
    """
    for x, y in piece.cells():
        if x < 0 or x >= grid.width or y >= grid.height:
            return True
        if y < 0:
            continue
        if grid.grid[y, x] != 0:
            return True
    return False
