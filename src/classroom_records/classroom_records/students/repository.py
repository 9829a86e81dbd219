from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Giao diện repository cho danh sách lớp (roster).

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get(self, account: str) -> Optional[Student]:
        raise NotImplementedError

    def list(self, *, group: Optional[str] = None) -> Sequence[Student]:
        """Students ordered by (surname, name)."""

        raise NotImplementedError

    def upsert(self, student: Student) -> None:
        raise NotImplementedError

    def update_group(self, account: str, group: str) -> bool:
        raise NotImplementedError

    def delete(self, account: str) -> bool:
        raise NotImplementedError
