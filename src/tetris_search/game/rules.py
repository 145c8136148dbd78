from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)

    def score_for_lines(self, lines: int) -> int:
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1]
        return 0


DEFAULT_RULES = ScoringRules()
