"""Role gates for the Flask controllers.

Each gate resolves the bearer token into an :class:`AuthenticatedAccount`,
answers 401 when the caller is not authenticated and 403 when the caller's
role is not one of the allowed roles.
"""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from .enums import Role
from .exceptions import AuthenticationError, AuthorizationError
from .tokens import AuthenticatedAccount, TokenService


def bearer_token(header_value: Optional[str]) -> Optional[str]:
    if not header_value:
        return None
    scheme, _, token = header_value.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def roles_required(tokens: TokenService, *roles: Role):
    allowed = frozenset(roles)
    label = " or ".join(r.value for r in roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token(request.headers.get("Authorization"))
            if not token:
                raise AuthenticationError("Unauthorized request, please login")

            account = tokens.decode(token)
            if account.role not in allowed:
                raise AuthorizationError(f"Forbidden: {label} access required")

            g.current_account = account
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_account() -> AuthenticatedAccount:
    account = g.get("current_account")
    if account is None:
        raise AuthenticationError("Unauthorized request, please login")
    return account
