from __future__ import annotations

from enum import Enum
from typing import Optional, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_enum(value, enum_cls: type[E], field_name: str) -> E:
    """Accept an enum member, its value or its member name."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if value == member.value or value.upper() == member.name:
                return member
    raise ValidationError(f"{field_name} is not valid: {value!r}")


def normalize_email(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email")
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("Email is not valid")
    return email
