from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from ..core.exceptions import ValidationError


class RowValidationError(ValidationError):
    """A row failed validation on a specific field."""

    def __init__(self, field_name: str, message: str):
        super().__init__(message)
        self.field_name = field_name


@dataclass(frozen=True)
class RowError:
    row: int
    account: str
    field: str
    error: str

    def to_dict(self) -> dict:
        return {"row": self.row, "account": self.account, "field": self.field, "error": self.error}


@dataclass(frozen=True)
class ValidatedItem:
    """A row that passed validation, ready to commit."""

    row: int
    account: str
    value: Any


@dataclass(frozen=True)
class CommitOutcome:
    processed: int = 0
    errors: List[RowError] = field(default_factory=list)


@dataclass(frozen=True)
class ImportResult:
    success: bool
    message: str
    errors: List[RowError] = field(default_factory=list)
    processed_count: int = 0
    total_count: int = 0

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "errors": [e.to_dict() for e in self.errors],
            "processedCount": self.processed_count,
            "totalCount": self.total_count,
        }
