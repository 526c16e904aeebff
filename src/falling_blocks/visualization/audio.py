from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import pygame

from falling_blocks.game import EventType, GameEvent


logger = logging.getLogger(__name__)

SOUND_FILES = {
    "move": "move.wav",
    "rotate": "rotate.wav",
    "hard_drop": "hard_drop.wav",
    "line_clear": "line_clear.wav",
    "tetris": "tetris.wav",
    "game_over": "game_over.wav",
}
THEME_FILE = "theme.mp3"


def sound_for_event(event: GameEvent) -> Optional[str]:
    """Name of the effect to play for `event`, if any."""
    if event.type is EventType.MOVE_ACCEPTED:
        return "move"
    if event.type is EventType.ROTATION_SUCCEEDED:
        return "rotate"
    if event.type is EventType.HARD_DROP:
        return "hard_drop"
    if event.type is EventType.LINES_CLEARED:
        return "tetris" if event.is_tetris else "line_clear"
    if event.type is EventType.GAME_OVER:
        return "game_over"
    return None


class SoundBoard:
    """Plays effects and the looping theme in response to game events.

    Sounds are loaded from `sounds_dir`; files that are not present are
    skipped. Without a directory, or without an audio device, the board is
    silent.
    """

    def __init__(self, sounds_dir: Optional[Path] = None) -> None:
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.theme_path: Optional[Path] = None
        if sounds_dir is None:
            return
        sounds_dir = Path(sounds_dir)
        if not pygame.mixer.get_init():
            try:
                pygame.mixer.init()
            except pygame.error as exc:
                logger.warning("audio disabled, mixer unavailable: %s", exc)
                return
        for name, filename in SOUND_FILES.items():
            path = sounds_dir / filename
            if path.is_file():
                self.sounds[name] = pygame.mixer.Sound(str(path))
            else:
                logger.debug("sound %s not found", path)
        theme = sounds_dir / THEME_FILE
        if theme.is_file():
            self.theme_path = theme
            pygame.mixer.music.load(str(theme))

    def play(self, name: str) -> None:
        sound = self.sounds.get(name)
        if sound is not None:
            sound.play()

    def start_theme(self) -> None:
        if self.theme_path is not None:
            pygame.mixer.music.play(loops=-1)

    def pause_theme(self) -> None:
        if self.theme_path is not None:
            pygame.mixer.music.pause()

    def resume_theme(self) -> None:
        if self.theme_path is not None:
            pygame.mixer.music.unpause()

    def stop_theme(self) -> None:
        if self.theme_path is not None:
            pygame.mixer.music.stop()

    def handle(self, events: Iterable[GameEvent]) -> None:
        for event in events:
            if event.type is EventType.STARTED:
                self.start_theme()
            elif event.type is EventType.PAUSED:
                self.pause_theme()
            elif event.type is EventType.RESUMED:
                self.resume_theme()
            elif event.type is EventType.GAME_OVER:
                self.stop_theme()
            name = sound_for_event(event)
            if name is not None:
                self.play(name)
