from __future__ import annotations

import math

from .base import EfficiencyCalculator


class CompletionRateCalculator(EfficiencyCalculator):
    """Percentage of tasks done, rounded half up; 0 for a team without tasks."""

    def efficiency(self, completed: int, total: int) -> int:
        if total <= 0:
            return 0
        return int(math.floor(100 * completed / total + 0.5))
