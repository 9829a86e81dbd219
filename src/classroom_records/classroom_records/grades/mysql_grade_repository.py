from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import GradeCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from .model import GradeRecord
from .repository import GradeRepository

# Column names come from the GradeCategory enum only, never from caller input.
_CATEGORY_COLUMNS = {c: c.value for c in GradeCategory}

_SELECT = f"""
    SELECT student_account, {", ".join(_CATEGORY_COLUMNS.values())}, total, updated_at, updated_by
    FROM grade_records
"""


def _row_to_record(r: dict) -> GradeRecord:
    return GradeRecord(
        student_account=str(r["student_account"]),
        total=float(r.get("total") or 0),
        updated_at=r.get("updated_at"),
        updated_by=r.get("updated_by"),
        **{column: optional_float(r.get(column)) for column in _CATEGORY_COLUMNS.values()},
    )


class MySQLGradeRepository(GradeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, account: str) -> Optional[GradeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE student_account=%s", (account,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_all(self) -> Sequence[GradeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY student_account ASC")
            return [_row_to_record(r) for r in fetchall(cur)]

    def upsert_category(
        self,
        *,
        account: str,
        category: GradeCategory,
        value: float,
        updated_at: datetime,
        updated_by: str,
    ) -> GradeRecord:
        column = _CATEGORY_COLUMNS[category]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO grade_records(student_account, {column}, total, updated_at, updated_by)
                VALUES(%s,%s,0,%s,%s)
                ON DUPLICATE KEY UPDATE
                    {column}=VALUES({column}),
                    updated_at=VALUES(updated_at),
                    updated_by=VALUES(updated_by)
                """,
                (account, float(value), updated_at, updated_by),
            )
            cur.execute(_SELECT + " WHERE student_account=%s", (account,))
            return _row_to_record(fetchone(cur))

    def save_total(self, *, account: str, total: float, updated_at: datetime) -> Optional[GradeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE grade_records SET total=%s, updated_at=%s WHERE student_account=%s",
                (float(total), updated_at, account),
            )
            cur.execute(_SELECT + " WHERE student_account=%s", (account,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def replace(self, record: GradeRecord) -> None:
        columns = list(_CATEGORY_COLUMNS.values())
        assignments = ", ".join(f"{c}=VALUES({c})" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO grade_records(student_account, {", ".join(columns)}, total, updated_at, updated_by)
                VALUES(%s, {", ".join(["%s"] * len(columns))}, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    {assignments},
                    total=VALUES(total),
                    updated_at=VALUES(updated_at),
                    updated_by=VALUES(updated_by)
                """,
                (
                    record.student_account,
                    *[record.score(c) for c in GradeCategory],
                    float(record.total),
                    record.updated_at,
                    record.updated_by,
                ),
            )

    def delete(self, account: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM grade_records WHERE student_account=%s", (account,))
            return cur.rowcount > 0
