"""Which permission requests a caller may list, by role."""
from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def normalize_status(value: Optional[str]) -> Optional[str]:
    # Unknown values are kept; they simply match no rows.
    value = (value or "").strip().lower()
    return value or None


def permission_list_status(role: Role, status_raw: Optional[str] = None) -> Optional[str]:
    """Status filter to apply for ``role``; admins always see every status."""
    if role == Role.ADMIN:
        return None
    if role == Role.VERIFIER:
        return normalize_status(status_raw)
    if role == Role.USER:
        raise AuthorizationError("Access denied")
    raise ValueError(f"Unhandled role: {role!r}")
