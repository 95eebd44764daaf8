from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_non_negative_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return number


def require_positive_float(value, field_name: str) -> float:
    number = _as_float(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be > 0")
    return number


def require_min_float(value, field_name: str, minimum: float) -> float:
    number = _as_float(value, field_name)
    if number < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    return number


def require_bool(value, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "1", "yes"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "0", "no"}:
        return False
    raise ValidationError(f"{field_name} must be a boolean")


def _as_float(value, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
