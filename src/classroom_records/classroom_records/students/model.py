from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Thực thể miền (domain): Sinh viên trong danh sách lớp.

    Lưu ý: Chỉ ``group`` được phép thay đổi sau khi import danh sách.
    """

    account: str
    name: str
    surname: str
    group: str

    @property
    def full_name(self) -> str:
        return f"{self.surname} {self.name}".strip()


@dataclass(frozen=True)
class StudentFilter:
    group: Optional[str] = None
    search_term: Optional[str] = None
