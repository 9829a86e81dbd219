from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Optional

from ..core.enums import GradeCategory


@dataclass(frozen=True)
class GradeRecord:
    """Thực thể miền (domain): Bảng điểm của một sinh viên (khoá: student_account).

    ``total`` chỉ được ghi bởi bước tính lại tổng, không nhận trực tiếp từ client.
    """

    student_account: str
    midterm: Optional[float] = None
    final: Optional[float] = None
    assignment1: Optional[float] = None
    assignment2: Optional[float] = None
    assignment3: Optional[float] = None
    project: Optional[float] = None
    participation: Optional[float] = None
    total: float = 0.0
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    def score(self, category: GradeCategory) -> Optional[float]:
        return getattr(self, category.value)

    def scores(self) -> Dict[GradeCategory, Optional[float]]:
        return {c: self.score(c) for c in GradeCategory}

    def with_score(self, category: GradeCategory, value: Optional[float]) -> "GradeRecord":
        return replace(self, **{category.value: value})

    def to_dict(self) -> dict:
        data = {c.value: self.score(c) for c in GradeCategory}
        data.update(
            {
                "studentAccount": self.student_account,
                "total": self.total,
                "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
                "updatedBy": self.updated_by,
            }
        )
        return data
