"""Row schemas for bulk import.

A schema knows which fields of a row carry the value, how to validate it and
which service operation writes it. Rows arrive as plain mappings (already parsed
from whatever file format the caller uses).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Tuple

from ..attendance.service import AttendanceService, DateLike, to_session_date
from ..common.validators import is_blank, require_account, require_bool, require_non_negative_int, require_score
from ..core.constants import ACCOUNT_FIELD_ALIASES
from ..core.enums import GradeCategory
from ..core.exceptions import ValidationError
from ..core.result import Result
from ..grades.service import GradeService, to_category
from ..identity.model import Subject
from ..students.model import Student
from ..students.service import RosterService
from .model import RowValidationError


@dataclass(frozen=True)
class ImportWriters:
    """Services the schemas write through. Each write goes through the guard."""

    attendance: AttendanceService
    grades: GradeService
    roster: RosterService


def first_present(row: Mapping[str, Any], aliases: Tuple[str, ...]) -> Optional[Any]:
    """First alias whose value is not missing. Only None and blank strings count as missing."""
    for alias in aliases:
        value = row.get(alias)
        if not is_blank(value):
            return value
    return None


def normalize_account(value: Any) -> str:
    # spreadsheets hand back 22520001.0 for numeric cells
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


class RowSchema(ABC):
    field: str = "value"
    value_aliases: Tuple[str, ...] = ()
    missing_message: str = "Thiếu giá trị"

    def extract_account(self, row: Mapping[str, Any]) -> Optional[str]:
        raw = first_present(row, ACCOUNT_FIELD_ALIASES)
        return None if raw is None else normalize_account(raw)

    def extract_value(self, row: Mapping[str, Any], account: str) -> Any:
        raw = first_present(row, self.value_aliases)
        if raw is None:
            raise RowValidationError(self.field, self.missing_message)
        try:
            return self.convert(raw)
        except ValidationError as exc:
            raise RowValidationError(self.field, str(exc)) from exc

    @abstractmethod
    def convert(self, raw: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def write(self, writers: ImportWriters, actor: Subject, account: str, value: Any) -> Result:
        raise NotImplementedError


class GradeRowSchema(RowSchema):
    """One grade category per row: ``{account, <category>|grade|score}``."""

    missing_message = "Thiếu điểm"

    def __init__(self, category):
        self.category: GradeCategory = to_category(category)
        self.field = self.category.value
        self.value_aliases = (self.category.value, "grade", "score")

    def convert(self, raw: Any) -> float:
        return require_score(raw, "Điểm")

    def write(self, writers: ImportWriters, actor: Subject, account: str, value: Any) -> Result:
        return writers.grades.upsert_grade_category(actor, account, self.category, value)


class AttendanceRowSchema(RowSchema):
    field = "isPresent"
    value_aliases = ("isPresent", "present", "attendance", "status")
    missing_message = "Thiếu trạng thái điểm danh"

    def __init__(self, session_date: DateLike):
        self.session_date: date = to_session_date(session_date)

    def convert(self, raw: Any) -> bool:
        return require_bool(raw, "Điểm danh")

    def write(self, writers: ImportWriters, actor: Subject, account: str, value: Any) -> Result:
        return writers.attendance.upsert_attendance(actor, account, self.session_date, value)


class ParticipationRowSchema(RowSchema):
    field = "participationCount"
    value_aliases = ("participationCount", "participation", "count")
    missing_message = "Thiếu số lần phát biểu"

    def __init__(self, session_date: DateLike):
        self.session_date: date = to_session_date(session_date)

    def convert(self, raw: Any) -> int:
        return require_non_negative_int(raw, "Số lần phát biểu")

    def write(self, writers: ImportWriters, actor: Subject, account: str, value: Any) -> Result:
        return writers.attendance.upsert_participation(actor, account, self.session_date, value)


class RosterRowSchema(RowSchema):
    """Roster rows: ``{account, name, surname, group}``."""

    field = "roster"
    _FIELDS = (
        ("name", ("name", "Tên"), "Thiếu tên"),
        ("surname", ("surname", "Họ"), "Thiếu họ"),
        ("group", ("group", "Nhóm"), "Thiếu nhóm"),
    )

    def extract_value(self, row: Mapping[str, Any], account: str) -> Student:
        try:
            require_account(account)
        except ValidationError as exc:
            raise RowValidationError("account", str(exc)) from exc

        values = {}
        for name, aliases, message in self._FIELDS:
            raw = first_present(row, aliases)
            if raw is None:
                raise RowValidationError(name, message)
            values[name] = str(raw).strip()
        return Student(account=account, **values)

    def convert(self, raw: Any) -> Any:
        return raw

    def write(self, writers: ImportWriters, actor: Subject, account: str, value: Any) -> Result:
        return writers.roster.add_student(actor, value)
