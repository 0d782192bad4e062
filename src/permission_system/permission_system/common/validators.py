from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", errors={field_name: "required"})
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(
            f"{field_name} must be at least {min_len} characters",
            errors={field_name: f"min={min_len}"},
        )
    return value


def require_length_between(value: Optional[str], field_name: str, min_len: int, max_len: int) -> str:
    # Length is measured on the value as sent; it is returned unchanged.
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field_name} is required", errors={field_name: "required"})
    if not min_len <= len(value) <= max_len:
        raise ValidationError(
            f"{field_name} must be between {min_len} and {max_len} characters",
            errors={field_name: f"min={min_len},max={max_len}"},
        )
    return value


def require_json_object(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body")
    return payload
