from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..database.memory import MemoryDatabase
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

TABLE = "attendance_records"


def _matches(r: AttendanceRecord, f: AttendanceFilter) -> bool:
    if f.session_date is not None and r.session_date != f.session_date:
        return False
    if f.student_account is not None and r.student_account != f.student_account:
        return False
    if f.start_date is not None and r.session_date < f.start_date:
        return False
    if f.end_date is not None and r.session_date > f.end_date:
        return False
    return True


class MemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get(self, account: str, session_date: date) -> Optional[AttendanceRecord]:
        with self._db.table(TABLE) as rows:
            return rows.get((account, session_date))

    def query(self, attendance_filter: AttendanceFilter) -> Sequence[AttendanceRecord]:
        with self._db.table(TABLE) as rows:
            items = [r for r in rows.values() if _matches(r, attendance_filter)]
        items.sort(key=lambda r: r.student_account)
        items.sort(key=lambda r: r.session_date, reverse=attendance_filter.newest_first)
        return items

    def _upsert(self, account: str, session_date: date, updated_at: datetime, updated_by: str, **fields) -> AttendanceRecord:
        key = (account, session_date)
        with self._db.table(TABLE) as rows:
            current = rows.get(key)
            if current is None:
                current = AttendanceRecord(student_account=account, session_date=session_date, created_at=updated_at)
            record = replace(current, updated_at=updated_at, updated_by=updated_by, **fields)
            rows[key] = record
            return record

    def upsert_presence(
        self,
        *,
        account: str,
        session_date: date,
        is_present: bool,
        updated_at: datetime,
        updated_by: str,
    ) -> AttendanceRecord:
        return self._upsert(account, session_date, updated_at, updated_by, is_present=bool(is_present))

    def upsert_participation(
        self,
        *,
        account: str,
        session_date: date,
        participation_count: int,
        updated_at: datetime,
        updated_by: str,
    ) -> AttendanceRecord:
        return self._upsert(account, session_date, updated_at, updated_by, participation_count=int(participation_count))

    def delete(self, account: str, session_date: date) -> bool:
        with self._db.table(TABLE) as rows:
            return rows.pop((account, session_date), None) is not None

    def list_dates(self) -> Sequence[date]:
        with self._db.table(TABLE) as rows:
            return sorted({d for (_, d) in rows.keys()}, reverse=True)
