"""Pure aggregation functions.

Nothing here touches a repository; callers fetch the records and pass them in.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import (
    DEFAULT_GRADE_WEIGHTS,
    PARTICIPATION_SCORE_CAP,
    PARTICIPATION_SCORE_TABLE,
    RATE_GOOD,
    RATE_OK,
    RATE_POOR,
    TOTAL_DECIMALS,
)
from ..core.enums import GradeCategory
from ..grades.model import GradeRecord
from ..students.model import Student
from .model import AttendanceStats, BandThresholds, ClassStats, DateStat, GradeStats, StudentSummary


def participation_score(count: int) -> int:
    """0->0, 1->3, 2->6, 3->9, 4+->10. Negative counts score 0."""
    count = int(count or 0)
    if count <= 0:
        return 0
    return PARTICIPATION_SCORE_TABLE.get(count, PARTICIPATION_SCORE_CAP)


def weighted_total(
    scores: Mapping[GradeCategory, Optional[float]],
    weights: Mapping[GradeCategory, float] = DEFAULT_GRADE_WEIGHTS,
) -> float:
    """Weighted mean over the categories that have a score.

    Missing categories are left out of both the sum and the weight, so a student
    with only midterm and final is graded on those two. No scores -> 0.
    """
    total = 0.0
    total_weight = 0.0
    for category, weight in weights.items():
        value = scores.get(category)
        if value is None:
            continue
        total += float(value) * weight
        total_weight += weight

    if total_weight <= 0:
        return 0.0
    return round(total / total_weight, TOTAL_DECIMALS)


def _rate(part: int, whole: int) -> float:
    return part * 100 / whole if whole > 0 else 0.0


def _in_range(d: date, start: Optional[date], end: Optional[date]) -> bool:
    return (start is None or d >= start) and (end is None or d <= end)


def attendance_stats(
    records: Iterable[AttendanceRecord],
    start: Optional[date] = None,
    end: Optional[date] = None,
    *,
    bands: BandThresholds = BandThresholds(),
) -> AttendanceStats:
    in_range = [r for r in records if _in_range(r.session_date, start, end)]
    if not in_range:
        return AttendanceStats(distribution=bands.empty_distribution())

    by_date: Dict[date, List[AttendanceRecord]] = defaultdict(list)
    present_by_student: Dict[str, int] = defaultdict(int)
    for r in in_range:
        by_date[r.session_date].append(r)
        present_by_student[r.student_account] += 1 if r.is_present else 0

    date_stats = []
    for session_date in sorted(by_date):
        day = by_date[session_date]
        present = sum(1 for r in day if r.is_present)
        date_stats.append(
            DateStat(session_date=session_date, present_count=present, total_count=len(day), rate=_rate(present, len(day)))
        )

    total_classes = len(date_stats)
    distribution = bands.empty_distribution()
    for present in present_by_student.values():
        distribution[bands.band(_rate(present, total_classes))] += 1

    total_present = sum(1 for r in in_range if r.is_present)
    return AttendanceStats(
        total_classes=total_classes,
        total_students=len(present_by_student),
        attendance_rate=_rate(total_present, len(in_range)),
        date_stats=date_stats,
        distribution=distribution,
    )


def student_summary(student: Student, records: Iterable[AttendanceRecord], total_sessions: int) -> StudentSummary:
    """Summary of one student's records against the number of sessions held."""
    own = [r for r in records if r.student_account == student.account]
    present = sum(1 for r in own if r.is_present)
    total_sessions = max(int(total_sessions), 0)
    return StudentSummary(
        account=student.account,
        full_name=student.full_name,
        group=student.group,
        total_sessions=total_sessions,
        present_count=present,
        absent_count=max(total_sessions - present, 0),
        attendance_rate=_rate(present, total_sessions),
        total_participation=sum(max(int(r.participation_count or 0), 0) for r in own),
    )


def class_stats(summaries: Sequence[StudentSummary], *, bands: BandThresholds = BandThresholds()) -> ClassStats:
    distribution = bands.empty_distribution()
    if not summaries:
        return ClassStats(distribution=distribution)

    for s in summaries:
        distribution[bands.band(s.attendance_rate)] += 1

    return ClassStats(
        total_classes=summaries[0].total_sessions,
        total_students=len(summaries),
        average_attendance_rate=round(sum(s.attendance_rate for s in summaries) / len(summaries), TOTAL_DECIMALS),
        students_above_80=sum(1 for s in summaries if s.attendance_rate >= RATE_GOOD),
        students_above_70=sum(1 for s in summaries if s.attendance_rate >= RATE_OK),
        students_below_50=sum(1 for s in summaries if s.attendance_rate < RATE_POOR),
        distribution=distribution,
    )


def grade_stats(
    records: Iterable[GradeRecord],
    category: GradeCategory,
    *,
    bands: BandThresholds = BandThresholds(),
) -> GradeStats:
    """Stats for one category on the 0-10 scale (band thresholds divided by 10)."""
    values = [v for v in (r.score(category) for r in records) if v is not None]
    if not values:
        return GradeStats(category=category.value, distribution=bands.empty_distribution())

    scale = bands.scaled_down(10)
    distribution = scale.empty_distribution()
    for v in values:
        distribution[scale.band(v)] += 1

    return GradeStats(
        category=category.value,
        average=round(sum(values) / len(values), TOTAL_DECIMALS),
        highest=max(values),
        lowest=min(values),
        count=len(values),
        distribution=distribution,
    )
