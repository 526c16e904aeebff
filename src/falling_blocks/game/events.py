from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventType(Enum):
    STARTED = "started"
    MOVE_ACCEPTED = "move_accepted"
    MOVE_REJECTED = "move_rejected"
    ROTATION_SUCCEEDED = "rotation_succeeded"
    ROTATION_FAILED = "rotation_failed"
    HARD_DROP = "hard_drop"
    PIECE_LOCKED = "piece_locked"
    LINES_CLEARED = "lines_cleared"
    LEVEL_UP = "level_up"
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    """Signal for collaborators (sound, overlays, persistence).

    `value` carries the line count for LINES_CLEARED, the new level for
    LEVEL_UP, the rows descended for HARD_DROP and the final score for
    GAME_OVER. It is 0 otherwise.
    """

    type: EventType
    value: int = 0

    @property
    def is_tetris(self) -> bool:
        return self.type is EventType.LINES_CLEARED and self.value == 4
