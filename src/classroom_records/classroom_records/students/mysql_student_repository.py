from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository


def _row_to_student(row: dict) -> Student:
    return Student(
        account=str(row["account"]),
        name=row["name"],
        surname=row["surname"],
        group=row["group_name"],
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, account: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT account, name, surname, group_name FROM students WHERE account=%s",
                (account,),
            )
            row = fetchone(cur)
            return _row_to_student(row) if row else None

    def list(self, *, group: Optional[str] = None) -> Sequence[Student]:
        sql = "SELECT account, name, surname, group_name FROM students"
        params: tuple = ()
        if group is not None:
            sql += " WHERE group_name=%s"
            params = (group,)
        sql += " ORDER BY surname ASC, name ASC, account ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_student(r) for r in fetchall(cur)]

    def upsert(self, student: Student) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(account, name, surname, group_name)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), surname=VALUES(surname), group_name=VALUES(group_name)
                """,
                (student.account, student.name, student.surname, student.group),
            )

    def update_group(self, account: str, group: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET group_name=%s WHERE account=%s", (group, account))
            return cur.rowcount > 0

    def delete(self, account: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE account=%s", (account,))
            return cur.rowcount > 0
