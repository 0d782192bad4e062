from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AccountSummary:
    """Owner projection embedded in permission responses."""

    account_id: str
    name: str
    email: str
    role: Role
    verified: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.account_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "verified": self.verified,
        }


@dataclass(frozen=True)
class Account:
    """Domain entity: Account.

    Note: plain data object; ``password_hash`` is never serialized.
    ``permissions`` is only filled by listings (a tuple of ``Permission``).
    """

    account_id: str
    name: str
    email: str
    password_hash: str
    role: Role = Role.USER
    verified: bool = False
    created_at: Optional[datetime] = None
    permissions: tuple = ()

    def summary(self) -> AccountSummary:
        return AccountSummary(
            account_id=self.account_id,
            name=self.name,
            email=self.email,
            role=self.role,
            verified=self.verified,
        )

    def to_dict(self, *, include_permissions: bool = False) -> dict:
        out = self.summary().to_dict()
        out["created_at"] = _iso(self.created_at)
        if include_permissions:
            out["permissions"] = [p.to_dict(include_account=False) for p in self.permissions]
        return out
