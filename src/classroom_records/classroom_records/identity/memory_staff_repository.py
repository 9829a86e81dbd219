from __future__ import annotations

from typing import Optional

from ..database.memory import MemoryDatabase
from .model import StaffAccount
from .repository import StaffAccountRepository

TABLE = "staff_accounts"


class MemoryStaffAccountRepository(StaffAccountRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_by_email(self, email: str) -> Optional[StaffAccount]:
        key = email.strip().lower()
        with self._db.table(TABLE) as rows:
            return next((s for s in rows.values() if s.email.lower() == key), None)

    def upsert(self, staff: StaffAccount) -> None:
        with self._db.table(TABLE) as rows:
            rows[staff.account] = staff
