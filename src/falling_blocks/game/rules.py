from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)
    lines_per_level: int = 10
    base_drop_interval_ms: int = 1000
    drop_interval_step_ms: int = 50
    min_drop_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int = 0) -> int:
        if lines <= 0:
            return 0
        assert lines <= len(self.line_clear_scores), f"cannot clear {lines} lines at once"
        return self.line_clear_scores[lines - 1] * (level + 1)

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level

    def drop_interval_for_level(self, level: int) -> int:
        return max(self.min_drop_interval_ms, self.base_drop_interval_ms - level * self.drop_interval_step_ms)
