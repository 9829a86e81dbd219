from __future__ import annotations

from typing import Mapping, Optional

from ...core.constants import DEFAULT_GRADE_WEIGHTS
from ...core.enums import GradeCategory
from ...grades.model import GradeRecord
from ..engine import weighted_total
from .base import TotalCalculator


class WeightedTotalCalculator(TotalCalculator):
    """Standard rule: weighted mean of present categories, 2 decimals, 0 when empty."""

    def __init__(self, weights: Optional[Mapping[GradeCategory, float]] = None):
        self._weights = dict(weights or DEFAULT_GRADE_WEIGHTS)

    def total(self, record: GradeRecord) -> float:
        return weighted_total(record.scores(), self._weights)
