from __future__ import annotations

import logging
from typing import Iterator, Tuple

import numpy as np

from .collision import collides
from .grid import GameGrid
from .pieces import Piece, Shape


logger = logging.getLogger(__name__)


def rotate_matrix(shape: Shape) -> Shape:
    # clockwise: new[r][c] = old[h-1-c][r]
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


def kick_offsets(width: int) -> Iterator[int]:
    """Net horizontal shifts tried after a blocked rotation.

    Shifts are applied cumulatively with increments +1, -2, +3, -4, ...
    (net +1, -1, +2, -2, ...). The search stops as soon as the next
    increment would exceed `width`.
    """
    shift = 0
    step = 1
    while True:
        shift += step
        step = -(step + (1 if step > 0 else -1))
        if step > width:
            return
        yield shift


def rotate(grid: GameGrid, piece: Piece) -> Tuple[Piece, bool]:
    """Rotate `piece` a quarter turn, shifting it sideways if needed.

    Only horizontal shifts at the current row are tried. Returns the original
    piece and False when no legal position is found.
    """
    rotated = piece.with_matrix(rotate_matrix(piece.matrix))
    if not collides(grid, rotated):
        return rotated, True
    for shift in kick_offsets(rotated.width):
        candidate = rotated.moved(dx=shift)
        if not collides(grid, candidate):
            return candidate, True
    logger.debug("rotation of %s at (%d, %d) blocked", piece.kind.name, piece.x, piece.y)
    return piece, False
