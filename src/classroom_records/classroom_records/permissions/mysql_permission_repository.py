from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Capability, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Permission
from .repository import PermissionRepository

_COLUMNS = """
    student_account, can_mark_attendance, can_edit_grades, is_group_leader,
    role, created_at, updated_at, created_by
"""

# Column names come from this whitelist only, never from caller input.
_CAPABILITY_COLUMNS = {
    Capability.CAN_MARK_ATTENDANCE: "can_mark_attendance",
    Capability.CAN_EDIT_GRADES: "can_edit_grades",
    Capability.IS_GROUP_LEADER: "is_group_leader",
}


def _row_to_permission(row: dict) -> Permission:
    return Permission(
        student_account=str(row["student_account"]),
        can_mark_attendance=bool(row["can_mark_attendance"]),
        can_edit_grades=bool(row["can_edit_grades"]),
        is_group_leader=bool(row["is_group_leader"]),
        role=Role(row["role"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        created_by=row.get("created_by"),
    )


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, account: str) -> Optional[Permission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM permissions WHERE student_account=%s", (account,))
            row = fetchone(cur)
            return _row_to_permission(row) if row else None

    def save(self, permission: Permission) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO permissions(
                    student_account, can_mark_attendance, can_edit_grades, is_group_leader,
                    role, created_at, updated_at, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    can_mark_attendance=VALUES(can_mark_attendance),
                    can_edit_grades=VALUES(can_edit_grades),
                    is_group_leader=VALUES(is_group_leader),
                    role=VALUES(role),
                    updated_at=VALUES(updated_at),
                    created_by=COALESCE(created_by, VALUES(created_by))
                """,
                (
                    permission.student_account,
                    int(permission.can_mark_attendance),
                    int(permission.can_edit_grades),
                    int(permission.is_group_leader),
                    permission.role.value,
                    permission.created_at,
                    permission.updated_at,
                    permission.created_by,
                ),
            )

    def delete(self, account: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM permissions WHERE student_account=%s", (account,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Permission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM permissions ORDER BY student_account ASC")
            return [_row_to_permission(r) for r in fetchall(cur)]

    def list_by_capability(self, capability: Capability) -> Sequence[Permission]:
        column = _CAPABILITY_COLUMNS[capability]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM permissions WHERE {column}=1 ORDER BY student_account ASC"
            )
            return [_row_to_permission(r) for r in fetchall(cur)]
