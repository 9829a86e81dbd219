from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Capability
from ..database.memory import MemoryDatabase
from .model import Permission
from .repository import PermissionRepository

TABLE = "permissions"


class MemoryPermissionRepository(PermissionRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get(self, account: str) -> Optional[Permission]:
        with self._db.table(TABLE) as rows:
            return rows.get(account)

    def save(self, permission: Permission) -> None:
        with self._db.table(TABLE) as rows:
            rows[permission.student_account] = permission

    def delete(self, account: str) -> bool:
        with self._db.table(TABLE) as rows:
            return rows.pop(account, None) is not None

    def list_all(self) -> Sequence[Permission]:
        with self._db.table(TABLE) as rows:
            return sorted(rows.values(), key=lambda p: p.student_account)

    def list_by_capability(self, capability: Capability) -> Sequence[Permission]:
        return [p for p in self.list_all() if p.has(capability)]
