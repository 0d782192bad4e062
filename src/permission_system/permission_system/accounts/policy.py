"""Which accounts a caller may list, by role."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class AccountListScope:
    roles: tuple
    verified: Optional[bool] = None


def parse_verified_filter(value: Optional[str]) -> Optional[bool]:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def account_list_scope(role: Role, verified_raw: Optional[str] = None) -> AccountListScope:
    if role == Role.ADMIN:
        return AccountListScope(roles=(Role.USER, Role.VERIFIER))
    if role == Role.VERIFIER:
        return AccountListScope(roles=(Role.USER,), verified=parse_verified_filter(verified_raw))
    if role == Role.USER:
        raise AuthorizationError("Access denied")
    raise ValueError(f"Unhandled role: {role!r}")
