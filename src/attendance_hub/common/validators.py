from __future__ import annotations

from enum import Enum
from typing import Any, Optional, TypeVar

from ..core.exceptions import InvalidInput

E = TypeVar("E", bound=Enum)


def as_text(value: Any) -> str:
    """Raw JSON value -> stripped string ('' for None)."""
    return "" if value is None else str(value).strip()


def require_non_empty(value: Any, field_name: str) -> str:
    text = as_text(value)
    if not text:
        raise InvalidInput(f"{field_name} is required")
    return text


def require_enum(value: Any, enum_cls: type[E], field_name: str) -> E:
    try:
        return enum_cls(as_text(value).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInput(f"{field_name} must be one of: {allowed}")


def optional_text(value: Any) -> Optional[str]:
    return as_text(value) or None
