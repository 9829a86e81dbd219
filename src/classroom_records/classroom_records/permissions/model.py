from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Capability, Role
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PermissionGrant:
    """Input for PermissionService.set.

    Role and every capability flag are required together, so a caller that only
    wants to grant one capability still has to state a consistent role.
    """

    student_account: str
    can_mark_attendance: bool
    can_edit_grades: bool
    is_group_leader: bool
    role: Role

    def check_consistency(self) -> None:
        if self.is_group_leader != (self.role == Role.GROUP_LEADER):
            raise ValidationError(
                f"Quyền không nhất quán cho {self.student_account}: "
                f"role={self.role.value}, is_group_leader={self.is_group_leader}"
            )


@dataclass(frozen=True)
class Permission:
    """Thực thể miền (domain): Quyền hạn của một tài khoản (tối đa một bản ghi/tài khoản)."""

    student_account: str
    can_mark_attendance: bool
    can_edit_grades: bool
    is_group_leader: bool
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None

    @classmethod
    def default_for(cls, account: str) -> "Permission":
        """Default-deny record used when no Permission is stored."""
        return cls(
            student_account=account,
            can_mark_attendance=False,
            can_edit_grades=False,
            is_group_leader=False,
            role=Role.STUDENT,
        )

    def has(self, capability: Capability) -> bool:
        return bool(getattr(self, capability.value))

    def to_dict(self) -> dict:
        return {
            "studentAccount": self.student_account,
            "canMarkAttendance": self.can_mark_attendance,
            "canEditGrades": self.can_edit_grades,
            "isGroupLeader": self.is_group_leader,
            "role": self.role.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "createdBy": self.created_by,
        }
