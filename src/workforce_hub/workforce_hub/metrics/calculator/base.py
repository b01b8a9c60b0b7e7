from __future__ import annotations

from abc import ABC, abstractmethod


class EfficiencyCalculator(ABC):
    """Calculator interface (Strategy Pattern for team efficiency)."""

    @abstractmethod
    def efficiency(self, completed: int, total: int) -> int:
        raise NotImplementedError
