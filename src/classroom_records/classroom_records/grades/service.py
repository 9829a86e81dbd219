from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Union

from ..aggregation.calculator.base import TotalCalculator
from ..aggregation.calculator.weighted_calculator import WeightedTotalCalculator
from ..authorization.guard import AuthorizationGuard
from ..authorization.model import Target
from ..common.datetime_utils import now_local
from ..common.validators import is_blank, require_non_empty, require_score
from ..core.enums import Action, GradeCategory
from ..core.exceptions import DomainError, NotFound, ValidationError
from ..core.result import Result, capture
from ..identity.model import Subject
from ..students.repository import StudentRepository
from .model import GradeRecord
from .repository import GradeRepository

logger = logging.getLogger(__name__)

# Keys of GradeRecord.to_dict() that a full update ignores.
_DERIVED_FIELDS = {"studentAccount", "total", "updatedAt", "updatedBy"}


def to_category(value: Union[GradeCategory, str]) -> GradeCategory:
    if isinstance(value, GradeCategory):
        return value
    try:
        return GradeCategory(str(value).strip())
    except ValueError:
        raise ValidationError(f"Cột điểm không hợp lệ: {value!r}")


class GradeService:
    """Use case: ghi điểm thành phần và tính lại tổng.

    ``total`` is derived: every write recomputes it with the configured
    TotalCalculator before returning, and no caller-supplied total is accepted.
    """

    def __init__(
        self,
        grades: GradeRepository,
        students: StudentRepository,
        guard: AuthorizationGuard,
        *,
        calculator: Optional[TotalCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._grades = grades
        self._students = students
        self._guard = guard
        self._calculator = calculator or WeightedTotalCalculator()
        self._clock = clock

    def _check_target(self, subject: Subject, account: str) -> str:
        account = require_non_empty(account, "MSSV")
        if self._students.get(account) is None:
            raise NotFound(f"Sinh viên {account} không tồn tại")
        self._guard.require(subject, Action.EDIT_GRADE, Target(account))
        return account

    def _recompute(self, record: GradeRecord) -> GradeRecord:
        total = self._calculator.total(record)
        saved = self._grades.save_total(account=record.student_account, total=total, updated_at=record.updated_at or self._clock())
        return saved or record

    def upsert_grade_category(
        self, subject: Subject, account: str, category: Union[GradeCategory, str], value: Any
    ) -> Result[GradeRecord]:
        def _upsert() -> GradeRecord:
            cat = to_category(category)
            score = require_score(value, f"Điểm {cat.value}")
            target = self._check_target(subject, account)
            record = self._grades.upsert_category(
                account=target,
                category=cat,
                value=score,
                updated_at=self._clock(),
                updated_by=subject.account,
            )
            record = self._recompute(record)
            logger.info("Grade %s %s=%s total=%s by %s", target, cat.value, score, record.total, subject.account)
            return record

        return capture(_upsert)

    def update_full_grade(self, subject: Subject, account: str, scores: Mapping[str, Any]) -> Result[GradeRecord]:
        """Replace every category at once. Blank or missing categories are cleared."""

        def _update() -> GradeRecord:
            values = {}
            for key in scores:
                if key not in _DERIVED_FIELDS:
                    to_category(key)
            for cat in GradeCategory:
                raw = scores.get(cat.value)
                values[cat.value] = None if is_blank(raw) else require_score(raw, f"Điểm {cat.value}")
            target = self._check_target(subject, account)

            record = GradeRecord(student_account=target, updated_at=self._clock(), updated_by=subject.account, **values)
            record = replace(record, total=self._calculator.total(record))
            self._grades.replace(record)
            logger.info("Grades of %s replaced, total=%s by %s", target, record.total, subject.account)
            return record

        return capture(_update)

    def get_grades(self, subject: Subject, account: str) -> Result[Optional[GradeRecord]]:
        def _get() -> Optional[GradeRecord]:
            self._guard.require(subject, Action.READ, Target(account))
            return self._grades.get(account)

        return capture(_get)

    def list_grades(self, subject: Subject) -> List[GradeRecord]:
        """Records visible to ``subject``. Fails soft: storage errors give an empty list."""
        try:
            scope = self._guard.read_scope(subject)
            records = self._grades.list_all()
        except DomainError as exc:
            logger.warning("Could not list grade records: %s", exc)
            return []
        return [r for r in records if scope.includes(r.student_account)]

    def delete_grade(self, subject: Subject, account: str) -> Result[None]:
        def _delete() -> None:
            self._guard.require(subject, Action.EDIT_GRADE, Target(account))
            if not self._grades.delete(account):
                raise NotFound(f"Không có bảng điểm của {account}")
            logger.info("Grades of %s deleted by %s", account, subject.account)

        return capture(_delete)
