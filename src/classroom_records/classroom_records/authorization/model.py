from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Union


@dataclass(frozen=True)
class Target:
    """What an action is applied to. ``account=None`` means no specific student."""

    account: Optional[str] = None

    @classmethod
    def none(cls) -> "Target":
        return cls(account=None)


@dataclass(frozen=True)
class Allow:
    allowed: bool = True
    reason: str = ""


@dataclass(frozen=True)
class Deny:
    reason: str
    allowed: bool = False


Decision = Union[Allow, Deny]


@dataclass(frozen=True)
class ReadScope:
    """Accounts a subject may read in aggregate views.

    ``everyone`` wins over ``accounts``.
    """

    everyone: bool = False
    accounts: FrozenSet[str] = frozenset()

    def includes(self, account: str) -> bool:
        return self.everyone or account in self.accounts
