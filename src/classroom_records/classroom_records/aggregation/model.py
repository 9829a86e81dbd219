from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from ..core.constants import DEFAULT_BAND_THRESHOLDS

BAND_LABELS = ("A", "B", "C", "D", "F")


@dataclass(frozen=True)
class BandThresholds:
    """Lower bounds for bands A..D; anything below ``d`` is F."""

    a: float = DEFAULT_BAND_THRESHOLDS[0]
    b: float = DEFAULT_BAND_THRESHOLDS[1]
    c: float = DEFAULT_BAND_THRESHOLDS[2]
    d: float = DEFAULT_BAND_THRESHOLDS[3]

    @classmethod
    def from_sequence(cls, values) -> "BandThresholds":
        a, b, c, d = (float(v) for v in values)
        if not a >= b >= c >= d:
            raise ValueError(f"Band thresholds must be descending: {values!r}")
        return cls(a, b, c, d)

    def scaled_down(self, divisor: float) -> "BandThresholds":
        return BandThresholds(self.a / divisor, self.b / divisor, self.c / divisor, self.d / divisor)

    def band(self, value: float) -> str:
        for label, bound in zip(BAND_LABELS, (self.a, self.b, self.c, self.d)):
            if value >= bound:
                return label
        return BAND_LABELS[-1]

    def empty_distribution(self) -> Dict[str, int]:
        return {label: 0 for label in BAND_LABELS}


@dataclass(frozen=True)
class DateStat:
    session_date: date
    present_count: int
    total_count: int
    rate: float


@dataclass(frozen=True)
class AttendanceStats:
    total_classes: int = 0
    total_students: int = 0
    attendance_rate: float = 0.0
    date_stats: List[DateStat] = field(default_factory=list)
    distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date_stats"] = [
            {**asdict(s), "session_date": s.session_date.isoformat()} for s in self.date_stats
        ]
        return data


@dataclass(frozen=True)
class StudentSummary:
    account: str
    full_name: str
    group: str
    total_sessions: int
    present_count: int
    absent_count: int
    attendance_rate: float
    total_participation: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ClassStats:
    total_classes: int = 0
    total_students: int = 0
    average_attendance_rate: float = 0.0
    students_above_80: int = 0
    students_above_70: int = 0
    students_below_50: int = 0
    distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GradeStats:
    category: str
    average: float = 0.0
    highest: float = 0.0
    lowest: float = 0.0
    count: int = 0
    distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


DateRange = Tuple[Optional[date], Optional[date]]
