from __future__ import annotations

from typing import Optional

import numpy as np
import pygame

from falling_blocks.game import GameSession, Piece, SessionState
from .palette import BACKGROUND, CELL_BORDER, EMPTY_CELL, GAME_OVER_TEXT, GHOST, TEXT, color_for_value


PREVIEW_CELLS = 4


class Renderer:
    """Draws a GameSession: board, ghost, next-piece preview and HUD."""

    def __init__(self, cols: int, rows: int, cell_size: int = 30, margin: int = 20) -> None:
        self.cols = cols
        self.rows = rows
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    @property
    def board_width(self) -> int:
        return self.cols * self.cell_size

    @property
    def board_height(self) -> int:
        return self.rows * self.cell_size

    @property
    def panel_x(self) -> int:
        return self.margin * 2 + self.board_width

    def window_size(self) -> tuple[int, int]:
        width = self.panel_x + PREVIEW_CELLS * self.cell_size + self.margin
        height = self.board_height + self.margin * 2
        return width, height

    def _fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 28)
            self._big_font = pygame.font.SysFont(None, 48)
        return self._font, self._big_font

    def _cell_rect(self, x0: int, y0: int, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x0 + x * self.cell_size, y0 + y * self.cell_size, self.cell_size - 1, self.cell_size - 1)

    def _draw_board(self, screen: pygame.Surface, state: np.ndarray) -> None:
        h, w = state.shape
        for y in range(h):
            for x in range(w):
                rect = self._cell_rect(self.margin, self.margin, x, y)
                pygame.draw.rect(screen, color_for_value(int(state[y, x])), rect)

    def _draw_ghost(self, screen: pygame.Surface, piece: Piece, ghost_y: int) -> None:
        for x, y in piece.moved(dy=ghost_y - piece.y).cells():
            if 0 <= y < self.rows:
                pygame.draw.rect(screen, GHOST, self._cell_rect(self.margin, self.margin, x, y), 2)

    def _draw_preview(self, screen: pygame.Surface, piece: Optional[Piece]) -> None:
        x0, y0 = self.panel_x, self.margin
        box = pygame.Rect(x0, y0, PREVIEW_CELLS * self.cell_size, PREVIEW_CELLS * self.cell_size)
        pygame.draw.rect(screen, EMPTY_CELL, box)
        if piece is None:
            return
        h, w = piece.matrix.shape
        off_x = PREVIEW_CELLS // 2 - w // 2
        off_y = PREVIEW_CELLS // 2 - h // 2
        for py in range(h):
            for px in range(w):
                v = int(piece.matrix[py, px])
                if v:
                    rect = self._cell_rect(x0, y0, off_x + px, off_y + py)
                    pygame.draw.rect(screen, color_for_value(v), rect)
                    pygame.draw.rect(screen, CELL_BORDER, rect, 2)

    def _draw_hud(self, screen: pygame.Surface, session: GameSession, high_score: int) -> None:
        font, _ = self._fonts()
        lines = [
            f"Score: {session.score}",
            f"Level: {session.level}",
            f"Lines: {session.lines_cleared}",
            f"High: {max(high_score, session.score)}",
        ]
        y = self.margin + PREVIEW_CELLS * self.cell_size + self.margin
        for txt in lines:
            screen.blit(font.render(txt, True, TEXT), (self.panel_x, y))
            y += 28

    def _draw_banner(self, screen: pygame.Surface, text: str, color: tuple[int, int, int]) -> None:
        _, big = self._fonts()
        band = pygame.Surface((self.board_width, 100), pygame.SRCALPHA)
        band.fill((0, 0, 0, 190))
        center_y = self.margin + self.board_height // 2
        screen.blit(band, (self.margin, center_y - 50))
        img = big.render(text, True, color)
        screen.blit(img, img.get_rect(center=(self.margin + self.board_width // 2, center_y)))

    def draw(self, screen: pygame.Surface, session: GameSession, high_score: int = 0) -> None:
        screen.fill(BACKGROUND)
        self._draw_board(screen, session.board_with_piece())
        if session.current_piece is not None and session.state in (SessionState.PLAYING, SessionState.PAUSED):
            self._draw_ghost(screen, session.current_piece, session.ghost_y())
        self._draw_preview(screen, session.next_piece)
        self._draw_hud(screen, session, high_score)

        if session.state is SessionState.READY:
            self._draw_banner(screen, "Press Enter", TEXT)
        elif session.state is SessionState.PAUSED:
            self._draw_banner(screen, "Paused", TEXT)
        elif session.state is SessionState.GAME_OVER:
            self._draw_banner(screen, "GAME OVER", GAME_OVER_TEXT)
        pygame.display.flip()
