from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Capability
from .model import Permission


class PermissionRepository(Protocol):
    def get(self, account: str) -> Optional[Permission]:
        raise NotImplementedError

    def save(self, permission: Permission) -> None:
        """Insert or replace the record keyed by ``student_account``."""

        raise NotImplementedError

    def delete(self, account: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Permission]:
        raise NotImplementedError

    def list_by_capability(self, capability: Capability) -> Sequence[Permission]:
        raise NotImplementedError
