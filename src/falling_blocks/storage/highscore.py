from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict


logger = logging.getLogger(__name__)

DEFAULT_KEY = "tetrisHighScore"


def default_path() -> Path:
    return Path.home() / ".falling_blocks" / "highscore.json"


class HighScoreStore:
    """Single best score kept in a small JSON file under a fixed key."""

    def __init__(self, path: Path | str | None = None, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path) if path is not None else default_path()
        self.key = key

    def _read(self) -> Dict[str, Any]:
        if not self.path.is_file():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must hold a JSON object, got {type(data).__name__}")
        return data

    def load(self) -> int:
        return int(self._read().get(self.key, 0))

    def submit(self, score: int) -> bool:
        """Store `score` if it beats the saved one. Returns True when written."""
        data = self._read()
        best = int(data.get(self.key, 0))
        if score <= best:
            return False
        data[self.key] = int(score)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        logger.info("new high score %d (previous %d)", score, best)
        return True
