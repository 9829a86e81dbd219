from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import GradeCategory
from .model import GradeRecord


class GradeRepository(Protocol):
    """One GradeRecord per student_account."""

    def get(self, account: str) -> Optional[GradeRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[GradeRecord]:
        raise NotImplementedError

    def upsert_category(
        self,
        *,
        account: str,
        category: GradeCategory,
        value: float,
        updated_at: datetime,
        updated_by: str,
    ) -> GradeRecord:
        """Write one category, leaving the others untouched."""

        raise NotImplementedError

    def save_total(self, *, account: str, total: float, updated_at: datetime) -> Optional[GradeRecord]:
        raise NotImplementedError

    def replace(self, record: GradeRecord) -> None:
        """Overwrite the whole record (all categories and total)."""

        raise NotImplementedError

    def delete(self, account: str) -> bool:
        raise NotImplementedError
