from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

import numpy as np

from .collision import collides
from .events import EventType, GameEvent
from .grid import GameGrid
from .lines import clear_lines
from .pieces import Piece, PieceBag, PieceFactory
from .rotation import rotate as rotate_piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5
    PAUSE = 6


class SessionState(Enum):
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    cols: int = 10
    rows: int = 20
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cols < 4:
            raise ValueError(f"cols must be >= 4 so every piece fits at spawn, got {self.cols}")
        if self.rows < 4:
            raise ValueError(f"rows must be >= 4, got {self.rows}")


class GameSession:
    """Falling-block game state machine.

    READY -> PLAYING <-> PAUSED -> GAME_OVER. Commands are only honoured while
    PLAYING; anywhere else they are no-ops that return False. Side effects for
    collaborators are queued as GameEvents and collected with drain_events().
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.grid = GameGrid(self.config.cols, self.config.rows)
        self.factory = PieceFactory(self.config.cols)
        self.bag = PieceBag(seed=self.config.random_seed)
        self.state = SessionState.READY
        self.score = 0
        self.lines_cleared = 0
        self.level = 0
        self.drop_interval_ms = self.rules.drop_interval_for_level(0)
        self.drop_counter_ms = 0.0
        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self._events: List[GameEvent] = []

    # ------------------------------------------------------------------
    # lifecycle

    def _reset_counters(self) -> None:
        self.grid.reset()
        self.score = 0
        self.lines_cleared = 0
        self.level = 0
        self.drop_interval_ms = self.rules.drop_interval_for_level(0)
        self.drop_counter_ms = 0.0

    def reset(self) -> None:
        """Discard the current session and return to READY."""
        self._reset_counters()
        self.current_piece = None
        self.next_piece = None
        self._events.clear()
        self.state = SessionState.READY

    def start(self) -> bool:
        if self.state not in (SessionState.READY, SessionState.GAME_OVER):
            logger.debug("start ignored in state %s", self.state.value)
            return False
        self._reset_counters()
        self.bag.refill()
        self.current_piece = self.factory.next_piece(self.bag)
        self.next_piece = self.factory.next_piece(self.bag)
        self.state = SessionState.PLAYING
        self._emit(EventType.STARTED)
        logger.info("session started (%dx%d)", self.grid.width, self.grid.height)
        return True

    def toggle_pause(self) -> bool:
        if self.state is SessionState.PLAYING:
            self.state = SessionState.PAUSED
            self._emit(EventType.PAUSED)
            return True
        if self.state is SessionState.PAUSED:
            self.state = SessionState.PLAYING
            self._emit(EventType.RESUMED)
            return True
        return False

    # ------------------------------------------------------------------
    # commands

    def _playing(self, command: str) -> bool:
        if self.state is not SessionState.PLAYING:
            logger.debug("%s ignored in state %s", command, self.state.value)
            return False
        assert self.current_piece is not None
        return True

    def tick(self, elapsed_ms: float) -> bool:
        """Advance the drop clock. Returns True if a drop step ran."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be >= 0, got {elapsed_ms}")
        if not self._playing("tick"):
            return False
        self.drop_counter_ms += elapsed_ms
        if self.drop_counter_ms >= self.drop_interval_ms:
            self._drop_step()
            return True
        return False

    def move(self, dx: int) -> bool:
        if dx not in (-1, 1):
            raise ValueError(f"dx must be -1 or 1, got {dx}")
        if not self._playing("move"):
            return False
        candidate = self.current_piece.moved(dx=dx)
        if collides(self.grid, candidate):
            self._emit(EventType.MOVE_REJECTED)
            return False
        self.current_piece = candidate
        self._emit(EventType.MOVE_ACCEPTED)
        return True

    def rotate(self) -> bool:
        if not self._playing("rotate"):
            return False
        self.current_piece, ok = rotate_piece(self.grid, self.current_piece)
        self._emit(EventType.ROTATION_SUCCEEDED if ok else EventType.ROTATION_FAILED)
        return ok

    def soft_drop(self) -> bool:
        """Move down one row. Returns False when the piece locked instead."""
        if not self._playing("soft_drop"):
            return False
        return self._drop_step()

    def hard_drop(self) -> bool:
        if not self._playing("hard_drop"):
            return False
        rows = self.ghost_y() - self.current_piece.y
        self.current_piece = self.current_piece.moved(dy=rows)
        self._emit(EventType.HARD_DROP, rows)
        self._lock()
        self.drop_counter_ms = 0.0
        return True

    def step(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.move(-1)
        if action == Action.RIGHT:
            return self.move(1)
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        if action == Action.PAUSE:
            return self.toggle_pause()
        return False

    # ------------------------------------------------------------------
    # internals

    def _drop_step(self) -> bool:
        self.drop_counter_ms = 0.0
        candidate = self.current_piece.moved(dy=1)
        if not collides(self.grid, candidate):
            self.current_piece = candidate
            return True
        self._lock()
        return False

    def _lock(self) -> None:
        piece = self.current_piece
        assert piece is not None and self.next_piece is not None
        for x, y in piece.cells():
            if y >= 0:
                self.grid.set_cell(x, y, int(piece.kind))
        self._emit(EventType.PIECE_LOCKED)

        lines = clear_lines(self.grid)
        if lines > 0:
            self._score_lines(lines)

        self.current_piece = self.next_piece
        self.next_piece = self.factory.next_piece(self.bag)
        if collides(self.grid, self.current_piece):
            self.state = SessionState.GAME_OVER
            self._emit(EventType.GAME_OVER, self.score)
            logger.info("game over: score=%d lines=%d level=%d", self.score, self.lines_cleared, self.level)

    def _score_lines(self, lines: int) -> None:
        self.score += self.rules.score_for_lines(lines, self.level)
        self.lines_cleared += lines
        self._emit(EventType.LINES_CLEARED, lines)
        new_level = self.rules.level_for_lines(self.lines_cleared)
        if new_level > self.level:
            self.level = new_level
            self.drop_interval_ms = self.rules.drop_interval_for_level(new_level)
            self._emit(EventType.LEVEL_UP, new_level)
            logger.debug("level %d, drop interval %d ms", new_level, self.drop_interval_ms)

    def _emit(self, event_type: EventType, value: int = 0) -> None:
        self._events.append(GameEvent(event_type, value))

    # ------------------------------------------------------------------
    # read-only views

    @property
    def is_playing(self) -> bool:
        return self.state is SessionState.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.state is SessionState.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.state is SessionState.GAME_OVER

    def drain_events(self) -> List[GameEvent]:
        events, self._events = self._events, []
        return events

    def ghost_y(self) -> int:
        """Row the active piece would land on if hard-dropped."""
        assert self.current_piece is not None
        piece = self.current_piece
        while not collides(self.grid, piece.moved(dy=1)):
            piece = piece.moved(dy=1)
        return piece.y

    def board(self) -> np.ndarray:
        return self.grid.clone_state()

    def board_with_piece(self) -> np.ndarray:
        # Active piece overlaid as negative kind ids
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.is_game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    state[y, x] = -int(self.current_piece.kind)
        return state

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "score": self.score,
            "lines_cleared": self.lines_cleared,
            "level": self.level,
            "drop_interval_ms": self.drop_interval_ms,
            "current_kind": int(self.current_piece.kind) if self.current_piece else 0,
            "next_kind": int(self.next_piece.kind) if self.next_piece else 0,
        }
