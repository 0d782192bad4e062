from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Account roles used by the route gates."""

    ADMIN = "admin"
    VERIFIER = "verifier"
    USER = "user"


class PermissionStatus(str, Enum):
    """Lifecycle states of a permission (leave) request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVISED = "revised"
    CANCELLED = "cancelled"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str], default: Optional["SortOrder"] = None) -> "SortOrder":
        """Case-insensitive parse; unknown input falls back to ``default`` (DESC)."""
        fallback = default or cls.DESC
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return fallback
