from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

BACKGROUND: Color = (17, 17, 17)
EMPTY_CELL: Color = (30, 30, 36)
CELL_BORDER: Color = (17, 17, 17)
GHOST: Color = (80, 80, 88)
TEXT: Color = (230, 230, 230)
GAME_OVER_TEXT: Color = (230, 0, 0)

# Indexed by PieceKind value; negative board values (active piece) use abs()
PALETTE = {
    0: EMPTY_CELL,
    1: (255, 13, 114),   # T
    2: (13, 194, 255),   # I
    3: (13, 255, 114),   # O
    4: (245, 56, 255),   # L
    5: (255, 142, 13),   # J
    6: (255, 225, 56),   # S
    7: (56, 119, 255),   # Z
}


def color_for_value(v: int) -> Color:
    return PALETTE.get(abs(v), (200, 200, 200))
