from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_BATCH_MAX_WORKERS, FIRST_DATA_ROW
from ..identity.model import Subject
from .model import CommitOutcome, ImportResult, RowError, RowValidationError, ValidatedItem
from .policy import AllOrNothingPolicy, CommitPolicy
from .schemas import ImportWriters, RowSchema

logger = logging.getLogger(__name__)


class BatchImportService:
    """Use case: validate a batch of rows, then commit them under a CommitPolicy.

    Commit writes run concurrently with no ordering guarantee and no cross-row
    transaction: a failed write is reported for its row and the rest stay written.
    """

    def __init__(
        self,
        writers: ImportWriters,
        *,
        policy: Optional[CommitPolicy] = None,
        max_workers: int = DEFAULT_BATCH_MAX_WORKERS,
    ):
        self._writers = writers
        self._policy = policy or AllOrNothingPolicy()
        self._max_workers = max(1, int(max_workers))

    @property
    def policy(self) -> CommitPolicy:
        return self._policy

    def validate_rows(
        self, rows: Sequence[Mapping[str, Any]], schema: RowSchema
    ) -> Tuple[List[ValidatedItem], List[RowError]]:
        items: List[ValidatedItem] = []
        errors: List[RowError] = []
        for index, row in enumerate(rows):
            row_number = index + FIRST_DATA_ROW
            account = schema.extract_account(row)
            if not account:
                errors.append(RowError(row_number, "N/A", "account", "Thiếu MSSV/Account"))
                continue
            try:
                value = schema.extract_value(row, account)
            except RowValidationError as exc:
                errors.append(RowError(row_number, account, exc.field_name, str(exc)))
                continue
            items.append(ValidatedItem(row=row_number, account=account, value=value))
        return items, errors

    def commit(self, items: Iterable[ValidatedItem], actor: Subject, schema: RowSchema) -> CommitOutcome:
        items = list(items)
        if not items:
            return CommitOutcome()

        def _write(item: ValidatedItem):
            return schema.write(self._writers, actor, item.account, item.value)

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(items))) as pool:
            results = list(pool.map(_write, items))

        errors = [
            RowError(item.row, item.account, "commit", str(result.error))
            for item, result in zip(items, results)
            if not result.ok
        ]
        processed = len(items) - len(errors)
        if errors:
            logger.warning("Batch commit by %s: %s written, %s failed", actor.account, processed, len(errors))
        return CommitOutcome(processed=processed, errors=errors)

    def process(self, rows: Sequence[Mapping[str, Any]], schema: RowSchema, actor: Subject) -> ImportResult:
        rows = list(rows)
        items, validation_errors = self.validate_rows(rows, schema)

        if not self._policy.should_commit(validation_errors):
            logger.info("Batch rejected: %s invalid rows out of %s", len(validation_errors), len(rows))
            return ImportResult(
                success=False,
                message=f"Có {len(validation_errors)} lỗi trong dữ liệu nhập",
                errors=validation_errors,
                processed_count=self._policy.reported_count(validated=len(items), committed=0, commit_ran=False),
                total_count=len(rows),
            )

        outcome = self.commit(items, actor, schema)
        errors = validation_errors + outcome.errors
        if errors:
            message = f"Đã cập nhật {outcome.processed}/{len(items)} bản ghi, {len(errors)} lỗi"
        else:
            message = f"Cập nhật thành công {outcome.processed} bản ghi"
        return ImportResult(
            success=not errors,
            message=message,
            errors=errors,
            processed_count=self._policy.reported_count(
                validated=len(items), committed=outcome.processed, commit_ran=True
            ),
            total_count=len(rows),
        )
