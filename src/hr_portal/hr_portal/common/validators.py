from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_role(value: object, field_name: str = "Role") -> Role:
    role = Role.normalize(value)
    if role is None:
        raise ValidationError(f"{field_name} is not valid")
    return role


def require_month_year(month: object, year: object) -> tuple[int, int]:
    try:
        m, y = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year must be numbers")
    if not 1 <= m <= 12:
        raise ValidationError("Month must be between 1 and 12")
    return m, y
