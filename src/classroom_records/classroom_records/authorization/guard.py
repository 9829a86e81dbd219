from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import Action, Role
from ..core.exceptions import PermissionDenied
from ..identity.model import Subject
from ..permissions.model import Permission
from ..permissions.repository import PermissionRepository
from ..students.repository import StudentRepository
from .model import Allow, Decision, Deny, ReadScope, Target

logger = logging.getLogger(__name__)

_ATTENDANCE_ACTIONS = {Action.MARK_ATTENDANCE, Action.UPDATE_PARTICIPATION}
_ADMIN_ACTIONS = {Action.MANAGE_PERMISSIONS, Action.MANAGE_ROSTER}


class AuthorizationGuard:
    """Pure decision over (Subject, Action, Target) -> Allow / Deny(reason).

    The guard holds no state of its own: permissions and groups are read from the
    repositories inside every call, so a group reassignment or a revoked
    capability takes effect on the very next decision.

    Effective role is the stored Permission role when a record exists, otherwise
    the role the subject logged in with. Capability flags are the actual gate.
    """

    def __init__(self, permissions: PermissionRepository, students: StudentRepository):
        self._permissions = permissions
        self._students = students

    def authorize(self, subject: Subject, action: Action, target: Optional[Target] = None) -> Decision:
        target = target or Target.none()
        decision = self._decide(subject, action, target)
        if not decision.allowed:
            logger.debug(
                "Denied %s on %s for %s: %s", action.value, target.account, subject.account, decision.reason
            )
        return decision

    def require(self, subject: Subject, action: Action, target: Optional[Target] = None) -> None:
        """Raise PermissionDenied when the decision is Deny."""
        decision = self.authorize(subject, action, target)
        if not decision.allowed:
            raise PermissionDenied(decision.reason)

    def _decide(self, subject: Subject, action: Action, target: Target) -> Decision:
        if action == Action.READ and target.account is None:
            return Allow()
        if not subject.authenticated or not subject.account:
            return Deny("Vui lòng đăng nhập")

        stored = self._permissions.get(subject.account)
        permission = stored or Permission.default_for(subject.account)
        role = stored.role if stored else subject.role

        if action in _ADMIN_ACTIONS:
            if stored is not None and stored.role == Role.TEACHER:
                return Allow()
            return Deny("Chỉ giáo viên mới được quản trị")

        if target.account is None:
            return Deny("Thiếu sinh viên đích")

        if role == Role.TEACHER:
            return self._teacher(action, permission)
        if role == Role.GROUP_LEADER:
            return self._group_leader(subject, action, target, permission)
        return self._student(subject, action, target)

    @staticmethod
    def _teacher(action: Action, permission: Permission) -> Decision:
        if action in _ATTENDANCE_ACTIONS:
            return Allow() if permission.can_mark_attendance else Deny("Bạn không có quyền điểm danh")
        if action == Action.EDIT_GRADE:
            return Allow() if permission.can_edit_grades else Deny("Bạn không có quyền sửa điểm")
        return Allow()

    def _group_leader(self, subject: Subject, action: Action, target: Target, permission: Permission) -> Decision:
        if action == Action.READ and target.account == subject.account:
            return Allow()

        if action in _ATTENDANCE_ACTIONS and not permission.can_mark_attendance:
            return Deny("Bạn không có quyền điểm danh")
        if action == Action.EDIT_GRADE and not permission.can_edit_grades:
            return Deny("Bạn không có quyền sửa điểm")

        own = self._students.get(subject.account)
        other = self._students.get(target.account)
        if own is None:
            return Deny("Nhóm trưởng không có trong danh sách lớp")
        if other is None:
            return Deny(f"Sinh viên {target.account} không tồn tại")
        if own.group != other.group:
            return Deny(f"Bạn chỉ có thể thao tác với sinh viên trong nhóm {own.group}")
        return Allow()

    @staticmethod
    def _student(subject: Subject, action: Action, target: Target) -> Decision:
        if action == Action.READ and target.account == subject.account:
            return Allow()
        if action == Action.READ:
            return Deny("Bạn chỉ được xem dữ liệu của chính mình")
        return Deny("Sinh viên không có quyền chỉnh sửa")

    def read_scope(self, subject: Subject) -> ReadScope:
        """Accounts ``subject`` may read, resolved fresh from the roster."""
        if not subject.authenticated or not subject.account:
            return ReadScope()

        stored = self._permissions.get(subject.account)
        role = stored.role if stored else subject.role
        if role == Role.TEACHER:
            return ReadScope(everyone=True)

        if role == Role.GROUP_LEADER:
            own = self._students.get(subject.account)
            if own is not None:
                members = {s.account for s in self._students.list(group=own.group)}
                return ReadScope(accounts=frozenset(members | {subject.account}))

        return ReadScope(accounts=frozenset({subject.account}))
