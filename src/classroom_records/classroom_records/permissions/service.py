from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_BATCH_MAX_WORKERS
from ..core.enums import Capability, Role
from ..core.exceptions import NotFound
from ..core.result import ItemOutcome, Result, capture
from ..common.datetime_utils import now_local
from .model import Permission, PermissionGrant
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


class PermissionService:
    """Use case: read and manage per-account capability records.

    Absence of a record is default-deny. ``set`` merges: an existing record keeps
    its ``created_at``/``created_by`` and gets a fresh ``updated_at``.
    """

    def __init__(
        self,
        permissions: PermissionRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        max_workers: int = DEFAULT_BATCH_MAX_WORKERS,
    ):
        self._permissions = permissions
        self._clock = clock
        self._max_workers = max(1, int(max_workers))

    def get(self, account: str) -> Optional[Permission]:
        return self._permissions.get(account)

    def effective(self, account: str) -> Permission:
        return self._permissions.get(account) or Permission.default_for(account)

    def list_all(self) -> Sequence[Permission]:
        return self._permissions.list_all()

    def list_by_capability(self, capability: Capability) -> Sequence[Permission]:
        return self._permissions.list_by_capability(capability)

    def set(self, grant: PermissionGrant, *, created_by: Optional[str] = None) -> Result[Permission]:
        return capture(self._set, grant, created_by)

    def _set(self, grant: PermissionGrant, created_by: Optional[str]) -> Permission:
        account = require_non_empty(grant.student_account, "Tài khoản")
        grant.check_consistency()
        now = self._clock()

        existing = self._permissions.get(account)
        if existing:
            permission = replace(
                existing,
                can_mark_attendance=grant.can_mark_attendance,
                can_edit_grades=grant.can_edit_grades,
                is_group_leader=grant.is_group_leader,
                role=grant.role,
                updated_at=now,
            )
        else:
            permission = Permission(
                student_account=account,
                can_mark_attendance=grant.can_mark_attendance,
                can_edit_grades=grant.can_edit_grades,
                is_group_leader=grant.is_group_leader,
                role=grant.role,
                created_at=now,
                updated_at=now,
                created_by=created_by,
            )

        self._permissions.save(permission)
        logger.info(
            "Permission set for %s: role=%s mark=%s grades=%s",
            account,
            permission.role.value,
            permission.can_mark_attendance,
            permission.can_edit_grades,
        )
        return permission

    def bulk_set(self, grants: Iterable[PermissionGrant], *, created_by: Optional[str] = None) -> List[ItemOutcome]:
        """Apply each grant independently; one failure does not affect the others."""
        grants = list(grants)
        if not grants:
            return []
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(grants))) as pool:
            results = list(pool.map(lambda g: self.set(g, created_by=created_by), grants))
        return [ItemOutcome(key=g.student_account, result=r) for g, r in zip(grants, results)]

    def delete(self, account: str) -> Result[None]:
        def _delete() -> None:
            if not self._permissions.delete(account):
                raise NotFound(f"Không tìm thấy quyền của {account}")
            logger.info("Permission deleted for %s", account)

        return capture(_delete)

    # Role presets. Each writes role and flags together.

    def initialize_default(self, account: str, *, created_by: str = "system") -> Result[Permission]:
        return self.set(
            PermissionGrant(account, can_mark_attendance=False, can_edit_grades=False, is_group_leader=False, role=Role.STUDENT),
            created_by=created_by,
        )

    def grant_attendance(self, account: str, role: Role = Role.STUDENT, *, created_by: str = "admin") -> Result[Permission]:
        return self.set(
            PermissionGrant(
                account,
                can_mark_attendance=True,
                can_edit_grades=role == Role.TEACHER,
                is_group_leader=role == Role.GROUP_LEADER,
                role=role,
            ),
            created_by=created_by,
        )

    def set_group_leader(self, account: str, *, created_by: str = "admin") -> Result[Permission]:
        return self.grant_attendance(account, Role.GROUP_LEADER, created_by=created_by)

    def set_teacher(self, account: str, *, created_by: str = "admin") -> Result[Permission]:
        return self.grant_attendance(account, Role.TEACHER, created_by=created_by)

    def revoke(self, account: str, *, created_by: str = "admin") -> Result[Permission]:
        return self.initialize_default(account, created_by=created_by)
