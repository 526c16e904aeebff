"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Fixed-size board with row-level mutation
- Piece, PieceKind, PieceBag, PieceFactory: Shape catalog and 7-bag spawning
- collides: Collision predicate
- rotate: Quarter-turn rotation with horizontal shifting
- clear_lines: Full-row removal
- ScoringRules: Points table, levels and drop timing
- GameSession: State machine driving a single game
"""

from .grid import GameGrid
from .pieces import Piece, PieceBag, PieceFactory, PieceKind
from .collision import collides
from .rotation import rotate, rotate_matrix
from .lines import clear_lines
from .rules import ScoringRules
from .events import EventType, GameEvent
from .core import Action, GameConfig, GameSession, SessionState

__all__ = [
    "GameGrid",
    "Piece",
    "PieceBag",
    "PieceFactory",
    "PieceKind",
    "collides",
    "rotate",
    "rotate_matrix",
    "clear_lines",
    "ScoringRules",
    "EventType",
    "GameEvent",
    "Action",
    "GameConfig",
    "GameSession",
    "SessionState",
]
