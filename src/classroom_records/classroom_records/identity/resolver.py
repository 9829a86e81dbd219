from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.constants import STUDENT_EMAIL_MARKERS, TEACHER_EMAIL_MARKERS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.result import Result, capture
from ..permissions.repository import PermissionRepository
from ..students.repository import StudentRepository
from .model import AccountCredential, Credential, FederatedAssertion, PasswordCredential, Subject
from .repository import StaffAccountRepository

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Use case: turn a credential into a Subject (role + roster account).

    Roster logins are passwordless. With ``strict_roster_lookup`` (the default)
    an account that is not on the roster is rejected; turning it off restores
    the old demo behaviour of a provisional student subject.
    """

    def __init__(
        self,
        students: StudentRepository,
        permissions: PermissionRepository,
        staff: Optional[StaffAccountRepository] = None,
        *,
        strict_roster_lookup: bool = True,
        teacher_markers: Sequence[str] = TEACHER_EMAIL_MARKERS,
        student_markers: Sequence[str] = STUDENT_EMAIL_MARKERS,
    ):
        self._students = students
        self._permissions = permissions
        self._staff = staff
        self._strict = strict_roster_lookup
        self._teacher_markers = tuple(m.lower() for m in teacher_markers)
        self._student_markers = tuple(m.lower() for m in student_markers)

    def resolve(self, credential: Credential) -> Result[Subject]:
        return capture(self._resolve, credential)

    def _resolve(self, credential: Credential) -> Subject:
        if isinstance(credential, AccountCredential):
            return self._resolve_account(credential.account)
        if isinstance(credential, PasswordCredential):
            return self._resolve_password(credential)
        if isinstance(credential, FederatedAssertion):
            return self._resolve_federated(credential)
        raise ValidationError("Phương thức đăng nhập không được hỗ trợ")

    def _upgrade(self, account: str, role: Role) -> Role:
        """Apply the stored Permission on top of the base role."""
        permission = self._permissions.get(account)
        if permission is None:
            return role
        if permission.role == Role.TEACHER:
            return Role.TEACHER
        if permission.is_group_leader and role == Role.STUDENT:
            return Role.GROUP_LEADER
        return role

    def _resolve_account(self, raw_account: str) -> Subject:
        account = require_non_empty(raw_account, "MSSV")
        student = self._students.get(account)
        if student is None:
            if self._strict:
                raise AuthenticationError(f"Không tìm thấy sinh viên {account} trong danh sách lớp")
            logger.warning("Student %s not on roster, issuing provisional subject", account)
            return Subject(
                account=account,
                role=Role.STUDENT,
                display_name=f"Sinh viên {account}",
                provisional=True,
            )

        return Subject(
            account=account,
            role=self._upgrade(account, Role.STUDENT),
            display_name=student.full_name,
        )

    def _resolve_password(self, credential: PasswordCredential) -> Subject:
        if self._staff is None:
            raise AuthenticationError("Đăng nhập bằng email không được bật")

        email = require_non_empty(credential.email, "Email").lower()
        staff = self._staff.get_by_email(email)
        if not staff or not staff.is_active:
            raise AuthenticationError("Đăng nhập thất bại. Vui lòng kiểm tra email và mật khẩu.")

        try:
            ok = check_password_hash(staff.password_hash, credential.password or "")
        except ValueError:
            # placeholder hashes such as 'CHANGE_ME'
            ok = False
        if not ok:
            raise AuthenticationError("Đăng nhập thất bại. Vui lòng kiểm tra email và mật khẩu.")

        role = self._role_from_email(email)
        return Subject(
            account=staff.account,
            role=self._upgrade(staff.account, role),
            display_name=staff.display_name,
            email=email,
        )

    def _resolve_federated(self, assertion: FederatedAssertion) -> Subject:
        if not assertion.email_verified:
            raise AuthenticationError("Email chưa được xác minh")
        subject_id = require_non_empty(assertion.subject_id, "subject_id")
        email = (assertion.email or "").strip().lower()
        role = self._role_from_email(email)

        if role == Role.TEACHER:
            account: Optional[str] = subject_id
        elif self._is_student_login(email, subject_id):
            account = subject_id
        else:
            account = None

        if account is not None:
            role = self._upgrade(account, role)
        return Subject(
            account=account,
            role=role,
            display_name=assertion.display_name or email or subject_id,
            email=email or None,
        )

    def _is_student_login(self, email: str, subject_id: str) -> bool:
        return any(m in email for m in self._student_markers) or subject_id.isdigit()

    def _role_from_email(self, email: str) -> Role:
        if any(m in email for m in self._teacher_markers):
            return Role.TEACHER
        return Role.STUDENT
