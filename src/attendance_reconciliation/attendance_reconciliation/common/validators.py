from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_id_list(value: Any, field_name: str) -> Optional[list[str]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list")
    return [require_non_empty(v, field_name) for v in value]


def require_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value
