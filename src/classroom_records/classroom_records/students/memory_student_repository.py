from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..database.memory import MemoryDatabase
from .model import Student
from .repository import StudentRepository

TABLE = "students"


class MemoryStudentRepository(StudentRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get(self, account: str) -> Optional[Student]:
        with self._db.table(TABLE) as rows:
            return rows.get(account)

    def list(self, *, group: Optional[str] = None) -> Sequence[Student]:
        with self._db.table(TABLE) as rows:
            items = [s for s in rows.values() if group is None or s.group == group]
        items.sort(key=lambda s: (s.surname, s.name, s.account))
        return items

    def upsert(self, student: Student) -> None:
        with self._db.table(TABLE) as rows:
            rows[student.account] = student

    def update_group(self, account: str, group: str) -> bool:
        with self._db.table(TABLE) as rows:
            current = rows.get(account)
            if current is None:
                return False
            rows[account] = replace(current, group=group)
            return True

    def delete(self, account: str) -> bool:
        with self._db.table(TABLE) as rows:
            return rows.pop(account, None) is not None
