from __future__ import annotations

from datetime import date

import pytest

from src.classroom_records.classroom_records.aggregation.engine import (
    attendance_stats,
    class_stats,
    grade_stats,
    student_summary,
)
from src.classroom_records.classroom_records.aggregation.model import BandThresholds, StudentSummary
from src.classroom_records.classroom_records.attendance.model import AttendanceRecord
from src.classroom_records.classroom_records.core.enums import GradeCategory
from src.classroom_records.classroom_records.grades.model import GradeRecord
from src.classroom_records.classroom_records.students.model import Student

D1 = date(2025, 3, 3)
D2 = date(2025, 3, 10)
D3 = date(2025, 3, 17)


def _rec(account: str, day: date, present: bool, participation: int = 0) -> AttendanceRecord:
    return AttendanceRecord(student_account=account, session_date=day, is_present=present, participation_count=participation)


def test_rate_seven_of_ten_is_seventy():
    records = [_rec(str(1000 + i), D1, i < 7) for i in range(10)]

    stats = attendance_stats(records)

    assert stats.attendance_rate == 70.0
    assert stats.total_classes == 1
    assert stats.total_students == 10
    assert stats.date_stats[0].rate == 70.0
    assert stats.date_stats[0].present_count == 7
    assert stats.distribution == {"A": 7, "B": 0, "C": 0, "D": 0, "F": 3}


def test_date_range_limits_sessions():
    records = [_rec("1001", D1, True), _rec("1001", D2, False), _rec("1001", D3, True)]

    stats = attendance_stats(records, start=D2, end=D3)

    assert stats.total_classes == 2
    assert [s.session_date for s in stats.date_stats] == [D2, D3]
    assert stats.attendance_rate == 50.0


def test_empty_records_give_zeros():
    stats = attendance_stats([])

    assert stats.total_classes == 0
    assert stats.attendance_rate == 0.0
    assert stats.date_stats == []
    assert stats.distribution == {"A": 0, "B": 0, "C": 0, "D": 0, "F": 0}


def test_bands_are_configurable():
    records = [_rec("1001", D1, True), _rec("1001", D2, False)]

    stats = attendance_stats(records, bands=BandThresholds(90, 80, 60, 50))

    # 50% attendance
    assert stats.distribution["D"] == 1


def test_band_thresholds_must_descend():
    with pytest.raises(ValueError):
        BandThresholds.from_sequence([70, 85, 55, 40])


def test_student_summary_counts_against_sessions_held():
    student = Student("1002", "Bình", "Trần", "A")
    records = [
        _rec("1002", D1, True, participation=2),
        _rec("1002", D2, True, participation=1),
        _rec("1002", D3, True),
        _rec("1003", D3, True),
    ]

    summary = student_summary(student, records, total_sessions=4)

    assert summary.present_count == 3
    assert summary.absent_count == 1
    assert summary.attendance_rate == 75.0
    assert summary.total_participation == 3
    assert summary.full_name == "Trần Bình"


def test_student_summary_without_sessions():
    summary = student_summary(Student("1002", "Bình", "Trần", "A"), [], total_sessions=0)
    assert summary.attendance_rate == 0.0
    assert summary.absent_count == 0


def _summary(account: str, rate: float) -> StudentSummary:
    return StudentSummary(
        account=account,
        full_name=account,
        group="A",
        total_sessions=10,
        present_count=int(rate / 10),
        absent_count=10 - int(rate / 10),
        attendance_rate=rate,
        total_participation=0,
    )


def test_class_stats_counters():
    stats = class_stats([_summary("1", 90.0), _summary("2", 75.0), _summary("3", 40.0)])

    assert stats.total_students == 3
    assert stats.total_classes == 10
    assert stats.average_attendance_rate == 68.33
    assert stats.students_above_80 == 1
    assert stats.students_above_70 == 2
    assert stats.students_below_50 == 1
    assert stats.distribution == {"A": 1, "B": 1, "C": 0, "D": 1, "F": 0}


def test_grade_stats_on_ten_point_scale():
    records = [
        GradeRecord("1001", midterm=9),
        GradeRecord("1002", midterm=7.5),
        GradeRecord("1003", midterm=3),
        GradeRecord("2001"),
    ]

    stats = grade_stats(records, GradeCategory.MIDTERM)

    assert stats.count == 3
    assert stats.average == 6.5
    assert stats.highest == 9
    assert stats.lowest == 3
    assert stats.distribution == {"A": 1, "B": 1, "C": 0, "D": 0, "F": 1}


def test_grade_stats_without_values():
    stats = grade_stats([GradeRecord("1001")], GradeCategory.FINAL)
    assert stats.count == 0
    assert stats.average == 0.0
