from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def require_date(value: Any, field_name: str) -> date:
    """Accept a date, a YYYY-MM-DD string or a full ISO timestamp (only its date part is kept)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", errors={field_name: "required"})
    text = value.strip()
    try:
        return parse_iso_date(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)", errors={field_name: "date"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
