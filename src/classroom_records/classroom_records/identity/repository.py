from __future__ import annotations

from typing import Optional, Protocol

from .model import StaffAccount


class StaffAccountRepository(Protocol):
    """Tài khoản đăng nhập bằng email/mật khẩu (giáo viên, trợ giảng)."""

    def get_by_email(self, email: str) -> Optional[StaffAccount]:
        raise NotImplementedError

    def upsert(self, staff: StaffAccount) -> None:
        raise NotImplementedError
