from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from .model import RowError


class CommitPolicy(ABC):
    """Decides whether a validated batch is committed and what count is reported."""

    @abstractmethod
    def should_commit(self, validation_errors: Sequence[RowError]) -> bool:
        raise NotImplementedError

    @abstractmethod
    def reported_count(self, *, validated: int, committed: int, commit_ran: bool) -> int:
        raise NotImplementedError


class AllOrNothingPolicy(CommitPolicy):
    """Any validation error blocks the whole batch.

    When the batch is blocked, ``processedCount`` is 0 by default (nothing was
    written). ``report_validated_count=True`` reports the number of rows that
    passed validation instead, as older clients expect.
    """

    def __init__(self, *, report_validated_count: bool = False):
        self.report_validated_count = report_validated_count

    def should_commit(self, validation_errors: Sequence[RowError]) -> bool:
        return not validation_errors

    def reported_count(self, *, validated: int, committed: int, commit_ran: bool) -> int:
        if commit_ran:
            return committed
        return validated if self.report_validated_count else 0
