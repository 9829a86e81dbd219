from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..authorization.guard import AuthorizationGuard
from ..authorization.model import Target
from ..common.validators import require_account, require_non_empty
from ..core.enums import Action
from ..core.exceptions import NotFound, ValidationError
from ..core.result import Result, capture
from ..identity.model import Subject
from .model import Student, StudentFilter
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: roster import, group reassignment and lookups."""

    def __init__(self, students: StudentRepository, guard: AuthorizationGuard):
        self._students = students
        self._guard = guard

    def get_student(self, account: str) -> Optional[Student]:
        return self._students.get(account)

    def list_students(self, student_filter: Optional[StudentFilter] = None) -> List[Student]:
        student_filter = student_filter or StudentFilter()
        students = list(self._students.list(group=student_filter.group))
        term = (student_filter.search_term or "").strip().lower()
        if term:
            students = [
                s
                for s in students
                if term in s.name.lower()
                or term in s.surname.lower()
                or term in s.account.lower()
                or term in s.group.lower()
            ]
        return students

    def list_groups(self) -> Sequence[str]:
        return sorted({s.group for s in self._students.list()})

    def add_student(self, subject: Subject, student: Student) -> Result[Student]:
        def _add() -> Student:
            self._guard.require(subject, Action.MANAGE_ROSTER)
            return self.import_student(student)

        return capture(_add)

    def import_student(self, student: Student) -> Student:
        """Roster import path (no guard).

        Re-importing an account may only move it to another group; a different
        name or surname for an existing account is rejected.
        """
        clean = Student(
            account=require_account(student.account),
            name=require_non_empty(student.name, "Tên"),
            surname=require_non_empty(student.surname, "Họ"),
            group=require_non_empty(student.group, "Nhóm"),
        )
        existing = self._students.get(clean.account)
        if existing is not None and (existing.name, existing.surname) != (clean.name, clean.surname):
            raise ValidationError(f"Sinh viên {clean.account} đã tồn tại với họ tên {existing.full_name}")
        self._students.upsert(clean)
        return clean

    def reassign_group(self, subject: Subject, account: str, group: str) -> Result[Student]:
        def _reassign() -> Student:
            self._guard.require(subject, Action.MANAGE_ROSTER)
            new_group = require_non_empty(group, "Nhóm")
            if not self._students.update_group(account, new_group):
                raise NotFound(f"Sinh viên {account} không tồn tại")
            logger.info("Student %s moved to group %s by %s", account, new_group, subject.account)
            return self._students.get(account)

        return capture(_reassign)

    def delete_student(self, subject: Subject, account: str) -> Result[None]:
        def _delete() -> None:
            self._guard.require(subject, Action.MANAGE_ROSTER, Target(account))
            if not self._students.delete(account):
                raise NotFound(f"Sinh viên {account} không tồn tại")
            logger.warning("Student %s deleted by %s", account, subject.account)

        return capture(_delete)
