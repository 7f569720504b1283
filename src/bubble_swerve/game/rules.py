from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    hard_drop_points_per_cell: int = 2
    soft_drop_points: int = 1
    points_per_level: int = 1000

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        # More than four lines at once is not in the table and awards nothing.
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1] * level
        return 0

    def level_for_score(self, score: int) -> int:
        return score // self.points_per_level + 1


@dataclass
class ScoreTracker:
    """Score, level and cleared-line counters. None of them ever decrease."""

    rules: ScoringRules = field(default_factory=ScoringRules)
    score: int = 0
    level: int = 1
    lines_cleared: int = 0

    def _award(self, points: int) -> int:
        self.score += max(0, points)
        self.level = self.rules.level_for_score(self.score)
        return points

    def on_lines_cleared(self, lines: int) -> int:
        if lines <= 0:
            return 0
        self.lines_cleared += lines
        return self._award(self.rules.score_for_lines(lines, self.level))

    def on_hard_drop(self, cells_dropped: int) -> int:
        return self._award(max(0, cells_dropped) * self.rules.hard_drop_points_per_cell)

    def on_soft_drop(self) -> int:
        return self._award(self.rules.soft_drop_points)

    def reset(self) -> None:
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
