from __future__ import annotations

from dataclasses import dataclass


LINE_CLEAR_SCORES = (100, 300, 500, 800)
SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2
LINES_PER_LEVEL = 10
MAX_LEVEL = 29

# The gravity curve is only defined on this level range
GRAVITY_MIN_LEVEL = 1
GRAVITY_MAX_LEVEL = 29


def clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = LINE_CLEAR_SCORES
    soft_drop_points: int = SOFT_DROP_POINTS
    hard_drop_points: int = HARD_DROP_POINTS
    lines_per_level: int = LINES_PER_LEVEL
    max_level: int = MAX_LEVEL

    def score_for_lines(self, lines: int, level: int) -> int:
        """Points for clearing `lines` rows at once; anything outside 1..4 scores 0."""
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1] * level
        return 0

    def level_for_lines(self, total_lines: int) -> int:
        return min(total_lines // self.lines_per_level + 1, self.max_level)

    @staticmethod
    def drop_interval_ms(level: int) -> float:
        """Milliseconds between gravity steps: (0.8 - (L-1)*0.007) ** (L-1) seconds."""
        lvl = clamp(level, GRAVITY_MIN_LEVEL, GRAVITY_MAX_LEVEL)
        seconds = (0.8 - (lvl - 1) * 0.007) ** (lvl - 1)
        return seconds * 1000.0
