from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..accounts.model import AccountSummary
from ..core.enums import PermissionStatus


@dataclass(frozen=True)
class Permission:
    """A leave/time-off request owned by one account."""

    permission_id: str
    account_id: str
    title: str
    reason: str
    start_date: date
    end_date: date
    status: PermissionStatus = PermissionStatus.PENDING
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    account: Optional[AccountSummary] = None

    def to_dict(self, *, include_account: bool = True) -> dict:
        out = {
            "id": self.permission_id,
            "title": self.title,
            "reason": self.reason,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "comment": self.comment or "",
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_account and self.account is not None:
            out["account"] = self.account.to_dict()
        return out
