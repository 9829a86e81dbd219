from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi điểm danh của một sinh viên trong một buổi học.

    Khoá: (student_account, session_date). Mỗi buổi chỉ có tối đa một bản ghi.
    """

    student_account: str
    session_date: date
    is_present: bool = False
    participation_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    @property
    def key(self) -> Tuple[str, date]:
        return (self.student_account, self.session_date)

    def to_dict(self) -> dict:
        return {
            "studentAccount": self.student_account,
            "date": self.session_date.isoformat(),
            "isPresent": self.is_present,
            "participationCount": self.participation_count,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "updatedBy": self.updated_by,
        }


@dataclass(frozen=True)
class AttendanceFilter:
    session_date: Optional[date] = None
    student_account: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    newest_first: bool = True
