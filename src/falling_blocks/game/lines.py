from __future__ import annotations

from .grid import GameGrid


def clear_lines(grid: GameGrid) -> int:
    """Remove full rows and drop everything above them.

    Rows are scanned bottom-up; row 0 is never tested. After a removal the
    same index is examined again since the rows above have shifted down.
    """
    cleared = 0
    y = grid.height - 1
    while y > 0:
        if grid.is_row_full(y):
            row = grid.take_row(y)
            grid.insert_row_at_top(row)
            cleared += 1
        else:
            y -= 1
    return cleared
