from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from ..authorization.guard import AuthorizationGuard
from ..authorization.model import Target
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_bool, require_non_empty, require_non_negative_int
from ..core.enums import Action
from ..core.exceptions import DomainError, NotFound
from ..core.result import Result, capture
from ..identity.model import Subject
from ..students.repository import StudentRepository
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


def to_session_date(value: DateLike) -> date:
    """Calendar-day granularity: datetimes are truncated, strings parsed as YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(value)


class AttendanceService:
    """Use case: mark attendance and participation for a session.

    Writes are idempotent upserts on (account, session_date): repeating a call
    with the same intent converges on one record, so callers may retry safely.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        guard: AuthorizationGuard,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._guard = guard
        self._clock = clock

    def _check_target(self, subject: Subject, action: Action, account: str) -> str:
        account = require_non_empty(account, "MSSV")
        if self._students.get(account) is None:
            raise NotFound(f"Sinh viên {account} không tồn tại")
        self._guard.require(subject, action, Target(account))
        return account

    def upsert_attendance(
        self, subject: Subject, account: str, session_date: DateLike, is_present: bool
    ) -> Result[AttendanceRecord]:
        def _upsert() -> AttendanceRecord:
            day = to_session_date(session_date)
            present = require_bool(is_present, "Điểm danh")
            target = self._check_target(subject, Action.MARK_ATTENDANCE, account)
            record = self._attendance.upsert_presence(
                account=target,
                session_date=day,
                is_present=present,
                updated_at=self._clock(),
                updated_by=subject.account,
            )
            logger.info("Attendance %s %s present=%s by %s", target, day, present, subject.account)
            return record

        return capture(_upsert)

    def upsert_participation(
        self, subject: Subject, account: str, session_date: DateLike, count: int
    ) -> Result[AttendanceRecord]:
        def _upsert() -> AttendanceRecord:
            day = to_session_date(session_date)
            participation = require_non_negative_int(count, "Số lần phát biểu")
            target = self._check_target(subject, Action.UPDATE_PARTICIPATION, account)
            record = self._attendance.upsert_participation(
                account=target,
                session_date=day,
                participation_count=participation,
                updated_at=self._clock(),
                updated_by=subject.account,
            )
            logger.info("Participation %s %s count=%s by %s", target, day, participation, subject.account)
            return record

        return capture(_upsert)

    def get_record(self, subject: Subject, account: str, session_date: DateLike) -> Result[Optional[AttendanceRecord]]:
        def _get() -> Optional[AttendanceRecord]:
            day = to_session_date(session_date)
            self._guard.require(subject, Action.READ, Target(account))
            return self._attendance.get(account, day)

        return capture(_get)

    def delete_attendance(self, subject: Subject, account: str, session_date: DateLike) -> Result[None]:
        def _delete() -> None:
            day = to_session_date(session_date)
            self._guard.require(subject, Action.MARK_ATTENDANCE, Target(account))
            if not self._attendance.delete(account, day):
                raise NotFound(f"Không có bản ghi điểm danh {account} ngày {day}")
            logger.info("Attendance %s %s deleted by %s", account, day, subject.account)

        return capture(_delete)

    def list_records(self, subject: Subject, attendance_filter: Optional[AttendanceFilter] = None) -> List[AttendanceRecord]:
        """Records visible to ``subject``. Fails soft: storage errors give an empty list."""
        try:
            scope = self._guard.read_scope(subject)
            records = self._attendance.query(attendance_filter or AttendanceFilter())
        except DomainError as exc:
            logger.warning("Could not list attendance records: %s", exc)
            return []
        return [r for r in records if scope.includes(r.student_account)]

    def list_dates(self) -> List[date]:
        try:
            return list(self._attendance.list_dates())
        except DomainError as exc:
            logger.warning("Could not list attendance dates: %s", exc)
            return []
