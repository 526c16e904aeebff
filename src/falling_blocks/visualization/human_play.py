from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, EventType, GameConfig, GameSession
from falling_blocks.storage import HighScoreStore
from falling_blocks.utils.logging import setup_logger
from .audio import SoundBoard
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_a: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_d: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_w: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_s: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--highscore", type=Path, default=None, help="High score JSON file")
    p.add_argument("--sounds", type=Path, default=None, help="Directory with sound effects")
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", type=str, default="info")
    return p


def run(seed: Optional[int] = None, highscore_path: Optional[Path] = None,
        sounds_dir: Optional[Path] = None, cell_size: int = 30, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        session = GameSession(GameConfig(random_seed=seed))
        store = HighScoreStore(highscore_path)
        high_score = store.load()
        renderer = Renderer(session.grid.width, session.grid.height, cell_size=cell_size)
        sounds = SoundBoard(sounds_dir)

        screen = pygame.display.set_mode(renderer.window_size())
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            elapsed_ms = clock.tick(fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_RETURN:
                        session.start()
                    elif event.key == pygame.K_r:
                        session.reset()
                        session.start()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            session.step(action)

            session.tick(elapsed_ms)

            events = session.drain_events()
            sounds.handle(events)
            for ev in events:
                if ev.type is EventType.GAME_OVER and store.submit(ev.value):
                    high_score = ev.value

            renderer.draw(screen, session, high_score)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="falling_blocks", level=args.log_level)
    run(seed=args.seed, highscore_path=args.highscore, sounds_dir=args.sounds,
        cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
