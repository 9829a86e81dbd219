from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import StaffAccount
from .repository import StaffAccountRepository


class MySQLStaffAccountRepository(StaffAccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[StaffAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account, email, display_name, password_hash, is_active
                FROM staff_accounts
                WHERE email=%s
                """,
                (email.strip().lower(),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return StaffAccount(
                account=str(r["account"]),
                email=r["email"],
                display_name=r["display_name"],
                password_hash=r["password_hash"],
                is_active=bool(r["is_active"]),
            )

    def upsert(self, staff: StaffAccount) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_accounts(account, email, display_name, password_hash, is_active)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    email=VALUES(email),
                    display_name=VALUES(display_name),
                    password_hash=VALUES(password_hash),
                    is_active=VALUES(is_active)
                """,
                (staff.account, staff.email.strip().lower(), staff.display_name, staff.password_hash, int(staff.is_active)),
            )
