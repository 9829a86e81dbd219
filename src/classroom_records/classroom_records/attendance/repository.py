from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    """Keyed by (student_account, session_date); upserts never create a second row."""

    def get(self, account: str, session_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def query(self, attendance_filter: AttendanceFilter) -> Sequence[AttendanceRecord]:
        """Ordered by session_date (newest first unless the filter says otherwise), then account."""

        raise NotImplementedError

    def upsert_presence(
        self,
        *,
        account: str,
        session_date: date,
        is_present: bool,
        updated_at: datetime,
        updated_by: str,
    ) -> AttendanceRecord:
        """Set presence; a new row starts with participation_count=0."""

        raise NotImplementedError

    def upsert_participation(
        self,
        *,
        account: str,
        session_date: date,
        participation_count: int,
        updated_at: datetime,
        updated_by: str,
    ) -> AttendanceRecord:
        """Set participation; a new row starts with is_present=False."""

        raise NotImplementedError

    def delete(self, account: str, session_date: date) -> bool:
        raise NotImplementedError

    def list_dates(self) -> Sequence[date]:
        """Distinct session dates, newest first."""

        raise NotImplementedError
