from .highscore import DEFAULT_KEY, HighScoreStore

__all__ = ["DEFAULT_KEY", "HighScoreStore"]
