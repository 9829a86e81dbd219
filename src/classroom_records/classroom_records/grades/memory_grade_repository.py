from __future__ import annotations

from dataclasses import replace as dc_replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import GradeCategory
from ..database.memory import MemoryDatabase
from .model import GradeRecord
from .repository import GradeRepository

TABLE = "grade_records"


class MemoryGradeRepository(GradeRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get(self, account: str) -> Optional[GradeRecord]:
        with self._db.table(TABLE) as rows:
            return rows.get(account)

    def list_all(self) -> Sequence[GradeRecord]:
        with self._db.table(TABLE) as rows:
            return sorted(rows.values(), key=lambda g: g.student_account)

    def upsert_category(
        self,
        *,
        account: str,
        category: GradeCategory,
        value: float,
        updated_at: datetime,
        updated_by: str,
    ) -> GradeRecord:
        with self._db.table(TABLE) as rows:
            current = rows.get(account) or GradeRecord(student_account=account)
            record = dc_replace(current.with_score(category, float(value)), updated_at=updated_at, updated_by=updated_by)
            rows[account] = record
            return record

    def save_total(self, *, account: str, total: float, updated_at: datetime) -> Optional[GradeRecord]:
        with self._db.table(TABLE) as rows:
            current = rows.get(account)
            if current is None:
                return None
            record = dc_replace(current, total=float(total), updated_at=updated_at)
            rows[account] = record
            return record

    def replace(self, record: GradeRecord) -> None:
        with self._db.table(TABLE) as rows:
            rows[record.student_account] = record

    def delete(self, account: str) -> bool:
        with self._db.table(TABLE) as rows:
            return rows.pop(account, None) is not None
