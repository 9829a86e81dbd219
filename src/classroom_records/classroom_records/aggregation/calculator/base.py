from __future__ import annotations

from abc import ABC, abstractmethod

from ...grades.model import GradeRecord


class TotalCalculator(ABC):
    """Calculator interface (Strategy Pattern for the grade total)."""

    @abstractmethod
    def total(self, record: GradeRecord) -> float:
        raise NotImplementedError
