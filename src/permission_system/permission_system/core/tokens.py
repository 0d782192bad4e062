from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

import jwt
from jwt.exceptions import InvalidTokenError

from ..common.datetime_utils import utc_now
from .constants import TOKEN_ALGORITHM
from .enums import Role
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedAccount:
    """Identity resolved from a bearer token (what handlers see as the caller)."""

    account_id: str
    email: str
    role: Role
    name: str


class TokenService:
    """Issue and verify HS256-signed JWT bearer tokens."""

    def __init__(self, *, secret_key: str, ttl_minutes: int, algorithm: str = TOKEN_ALGORITHM):
        self._secret_key = secret_key
        self._ttl = timedelta(minutes=int(ttl_minutes))
        self._algorithm = algorithm

    def issue(self, *, account_id: str, email: str, role: Role, name: str) -> str:
        now = utc_now()
        claims = {
            "sub": str(account_id),
            "email": email,
            "role": role.value,
            "name": name,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> AuthenticatedAccount:
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except InvalidTokenError as e:
            logger.warning("Rejected bearer token: %s", e.__class__.__name__)
            raise AuthenticationError("Unauthorized request, please login")

        try:
            role = Role(claims.get("role"))
        except ValueError:
            raise AuthenticationError("Unauthorized request, please login")

        return AuthenticatedAccount(
            account_id=str(claims["sub"]),
            email=claims.get("email") or "",
            role=role,
            name=claims.get("name") or "",
        )
