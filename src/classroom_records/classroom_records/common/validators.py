from __future__ import annotations

import math
from typing import Any

from ..core.constants import MAX_SCORE, MIN_SCORE
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return str(value).strip()


def require_account(value: Any) -> str:
    """Roster accounts are numeric strings (MSSV)."""
    account = require_non_empty(value, "MSSV")
    if not account.isdigit():
        raise ValidationError(f"MSSV phải là chuỗi số: {account!r}")
    return account


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_score(value: Any, field_name: str = "Điểm") -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} không hợp lệ (0-10)")
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ (0-10)")
    if math.isnan(score) or score < MIN_SCORE or score > MAX_SCORE:
        raise ValidationError(f"{field_name} không hợp lệ (0-10)")
    return score


def require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} phải là số nguyên không âm")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} phải là số nguyên không âm")
    if math.isnan(number) or math.isinf(number) or number < 0 or number != int(number):
        raise ValidationError(f"{field_name} phải là số nguyên không âm")
    return int(number)


_TRUE_VALUES = {"1", "true", "yes", "y", "x", "present", "co", "có"}
_FALSE_VALUES = {"0", "false", "no", "n", "absent", "khong", "không"}


def require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValidationError(f"{field_name} không hợp lệ (có/không)")
