from __future__ import annotations

import re
from datetime import date
from typing import Any

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_email(value: str, field_name: str = "email") -> str:
    value = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def require_date_order(start: date, end: date, *, start_name: str, end_name: str) -> None:
    if end < start:
        raise ValidationError(f"{end_name} must not be before {start_name}")
