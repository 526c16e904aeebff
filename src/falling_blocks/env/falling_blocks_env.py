from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, GameConfig, GameSession, PieceKind
from falling_blocks.visualization.palette import color_for_value


class FallingBlocksEnv(gym.Env):
    """Gymnasium adapter around GameSession.

    Actions (6 total): 0 left, 1 right, 2 rotate, 3 soft drop, 4 hard drop,
    5 no-op. After every action the drop clock advances by `frame_ms`.
    Reward is the change in game score.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 frame_ms: float = 1000.0 / 30.0,
                 max_episode_steps: int = 10_000) -> None:
        super().__init__()
        self.session = GameSession(config)
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.session.grid.height, self.session.grid.width
        n_kinds = len(PieceKind)

        # Board: locked cells 1..7, active piece as -1..-7
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(rows, cols), dtype=np.int8),
                "next_kind": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(int(Action.NONE) + 1)

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_piece = self.session.next_piece
        return {
            "board": self.session.board_with_piece().astype(np.int8),
            "next_kind": int(next_piece.kind) if next_piece is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        info = self.session.snapshot()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.session.bag.rng.seed(seed)
        self.session.reset()
        self.session.start()
        self.session.drain_events()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.session.score
        self.session.step(Action(int(action)))
        self.session.tick(self.frame_ms)
        events = self.session.drain_events()
        self._steps += 1

        reward = float(self.session.score - score_before)
        terminated = self.session.is_game_over
        truncated = (not terminated) and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["events"] = [event.type.value for event in events]
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.session.board_with_piece()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
        return img

    def close(self) -> None:
        pass
