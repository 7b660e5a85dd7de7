from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{field_name} required")
    return text


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_month(value: Any) -> int:
    month = require_int(value, "month")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    return month


def require_year(value: Any) -> int:
    year = require_int(value, "year")
    if year <= 0:
        raise ValidationError("year must be a positive integer")
    return year
