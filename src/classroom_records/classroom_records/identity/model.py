from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class Subject:
    """Principal resolved per login. Not persisted."""

    account: Optional[str]
    role: Role
    authenticated: bool = True
    display_name: str = ""
    email: Optional[str] = None
    provisional: bool = False

    @classmethod
    def anonymous(cls) -> "Subject":
        return cls(account=None, role=Role.STUDENT, authenticated=False)

    def to_session(self) -> dict:
        return {
            "account": self.account,
            "role": self.role.value,
            "authenticated": self.authenticated,
            "display_name": self.display_name,
            "email": self.email,
            "provisional": self.provisional,
        }

    @classmethod
    def from_session(cls, data: Optional[dict]) -> "Subject":
        if not data or not data.get("authenticated"):
            return cls.anonymous()
        return cls(
            account=data.get("account"),
            role=Role(data.get("role", Role.STUDENT.value)),
            authenticated=True,
            display_name=data.get("display_name") or "",
            email=data.get("email"),
            provisional=bool(data.get("provisional", False)),
        )


@dataclass(frozen=True)
class StaffAccount:
    """Tài khoản giáo viên/nhân sự (đăng nhập bằng email + mật khẩu)."""

    account: str
    email: str
    display_name: str
    password_hash: str
    is_active: bool = True


@dataclass(frozen=True)
class AccountCredential:
    """Passwordless roster login by MSSV."""

    account: str


@dataclass(frozen=True)
class PasswordCredential:
    email: str
    password: str


@dataclass(frozen=True)
class FederatedAssertion:
    """Claims from an external identity provider, already verified upstream."""

    subject_id: str
    email: Optional[str]
    email_verified: bool = False
    display_name: Optional[str] = None


Credential = Union[AccountCredential, PasswordCredential, FederatedAssertion]
