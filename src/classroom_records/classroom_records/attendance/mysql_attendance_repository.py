from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT student_account, session_date, is_present, participation_count,
           created_at, updated_at, updated_by
    FROM attendance_records
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        student_account=str(r["student_account"]),
        session_date=normalize_mysql_date(r["session_date"]),
        is_present=bool(r["is_present"]),
        participation_count=int(r.get("participation_count") or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        updated_by=r.get("updated_by"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, account: str, session_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE student_account=%s AND session_date=%s", (account, session_date))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def query(self, attendance_filter: AttendanceFilter) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if attendance_filter.session_date is not None:
            clauses.append("session_date=%s")
            params.append(attendance_filter.session_date)
        if attendance_filter.student_account is not None:
            clauses.append("student_account=%s")
            params.append(attendance_filter.student_account)
        if attendance_filter.start_date is not None:
            clauses.append("session_date>=%s")
            params.append(attendance_filter.start_date)
        if attendance_filter.end_date is not None:
            clauses.append("session_date<=%s")
            params.append(attendance_filter.end_date)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        direction = "DESC" if attendance_filter.newest_first else "ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT}{where} ORDER BY session_date {direction}, student_account ASC",
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def upsert_presence(
        self,
        *,
        account: str,
        session_date: date,
        is_present: bool,
        updated_at: datetime,
        updated_by: str,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    student_account, session_date, is_present, participation_count,
                    created_at, updated_at, updated_by
                )
                VALUES(%s,%s,%s,0,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    is_present=VALUES(is_present),
                    updated_at=VALUES(updated_at),
                    updated_by=VALUES(updated_by)
                """,
                (account, session_date, int(is_present), updated_at, updated_at, updated_by),
            )
            cur.execute(_SELECT + " WHERE student_account=%s AND session_date=%s", (account, session_date))
            return _row_to_record(fetchone(cur))

    def upsert_participation(
        self,
        *,
        account: str,
        session_date: date,
        participation_count: int,
        updated_at: datetime,
        updated_by: str,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    student_account, session_date, is_present, participation_count,
                    created_at, updated_at, updated_by
                )
                VALUES(%s,%s,0,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    participation_count=VALUES(participation_count),
                    updated_at=VALUES(updated_at),
                    updated_by=VALUES(updated_by)
                """,
                (account, session_date, int(participation_count), updated_at, updated_at, updated_by),
            )
            cur.execute(_SELECT + " WHERE student_account=%s AND session_date=%s", (account, session_date))
            return _row_to_record(fetchone(cur))

    def delete(self, account: str, session_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE student_account=%s AND session_date=%s",
                (account, session_date),
            )
            return cur.rowcount > 0

    def list_dates(self) -> Sequence[date]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT session_date FROM attendance_records ORDER BY session_date DESC")
            return [normalize_mysql_date(r["session_date"]) for r in fetchall(cur)]
