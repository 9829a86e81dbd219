from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Union

from ..aggregation import engine
from ..aggregation.model import AttendanceStats, BandThresholds, ClassStats, GradeStats, StudentSummary
from ..attendance.model import AttendanceFilter
from ..attendance.repository import AttendanceRepository
from ..authorization.guard import AuthorizationGuard
from ..authorization.model import Target
from ..core.enums import Action, GradeCategory
from ..core.exceptions import NotFound, StorageError
from ..core.result import Result, capture
from ..grades.repository import GradeRepository
from ..grades.service import to_category
from ..identity.model import Subject
from ..students.repository import StudentRepository

logger = logging.getLogger(__name__)


class SummaryReportService:
    """Read-side summaries (điểm danh, thống kê lớp, thống kê điểm).

    Fails soft: a storage error is logged and the caller gets a zero-valued
    result, so a dashboard never breaks because the store hiccupped. An
    authorization denial is still returned as an error.
    """

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        grades: GradeRepository,
        guard: AuthorizationGuard,
        *,
        bands: Optional[BandThresholds] = None,
    ):
        self._students = students
        self._attendance = attendance
        self._grades = grades
        self._guard = guard
        self._bands = bands or BandThresholds()

    def get_student_summary(self, subject: Subject, account: str) -> Result[StudentSummary]:
        def _summary() -> StudentSummary:
            self._guard.require(subject, Action.READ, Target(account))
            try:
                student = self._students.get(account)
                if student is None:
                    raise NotFound(f"Sinh viên {account} không tồn tại")
                total_sessions = len(self._attendance.list_dates())
                records = self._attendance.query(AttendanceFilter(student_account=account))
            except StorageError as exc:
                logger.warning("Student summary for %s unavailable: %s", account, exc)
                return StudentSummary(
                    account=account,
                    full_name="",
                    group="",
                    total_sessions=0,
                    present_count=0,
                    absent_count=0,
                    attendance_rate=0.0,
                    total_participation=0,
                )
            return engine.student_summary(student, records, total_sessions)

        return capture(_summary)

    def get_attendance_stats(
        self, subject: Subject, start: Optional[date] = None, end: Optional[date] = None
    ) -> Result[AttendanceStats]:
        def _stats() -> AttendanceStats:
            self._guard.require(subject, Action.READ)
            try:
                scope = self._guard.read_scope(subject)
                records = self._attendance.query(AttendanceFilter(start_date=start, end_date=end))
            except StorageError as exc:
                logger.warning("Attendance stats unavailable: %s", exc)
                return AttendanceStats(distribution=self._bands.empty_distribution())
            visible = [r for r in records if scope.includes(r.student_account)]
            return engine.attendance_stats(visible, start, end, bands=self._bands)

        return capture(_stats)

    def list_student_summaries(self, subject: Subject) -> List[StudentSummary]:
        """Summaries for every roster student ``subject`` may read."""
        try:
            scope = self._guard.read_scope(subject)
            students = [s for s in self._students.list() if scope.includes(s.account)]
            total_sessions = len(self._attendance.list_dates())
            records = self._attendance.query(AttendanceFilter())
        except StorageError as exc:
            logger.warning("Student summaries unavailable: %s", exc)
            return []
        return [engine.student_summary(s, records, total_sessions) for s in students]

    def get_class_summary(self, subject: Subject) -> Result[ClassStats]:
        def _class() -> ClassStats:
            self._guard.require(subject, Action.READ)
            return engine.class_stats(self.list_student_summaries(subject), bands=self._bands)

        return capture(_class)

    def get_grade_stats(self, subject: Subject, category: Union[GradeCategory, str]) -> Result[GradeStats]:
        def _grades() -> GradeStats:
            cat = to_category(category)
            self._guard.require(subject, Action.READ)
            try:
                scope = self._guard.read_scope(subject)
                records = [r for r in self._grades.list_all() if scope.includes(r.student_account)]
            except StorageError as exc:
                logger.warning("Grade stats for %s unavailable: %s", cat.value, exc)
                return GradeStats(category=cat.value, distribution=self._bands.empty_distribution())
            return engine.grade_stats(records, cat, bands=self._bands)

        return capture(_grades)
