from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.pagination import PageMetadata, offset_for
from ..common.validators import require_length_between, require_min_length, require_non_empty
from ..core.constants import NAME_MAX_LENGTH, NAME_MIN_LENGTH, PASSWORD_MIN_LENGTH
from ..core.enums import Role, SortOrder
from ..core.exceptions import AuthenticationError, DuplicateEmailError, NotFoundError, ValidationError
from ..core.tokens import TokenService
from ..permissions.repository import PermissionRepository
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use case: authenticate an account (login) and issue its bearer token."""

    def __init__(self, accounts: AccountRepository, tokens: TokenService):
        self._accounts = accounts
        self._tokens = tokens

    def login(self, email: str, password: str) -> str:
        email = require_non_empty(email, "email")
        password = require_non_empty(password, "password")

        # Unknown email and wrong password answer identically.
        account = self._accounts.get_by_email(email)
        if not account:
            logger.warning("Login failed: unknown email")
            raise AuthenticationError("Incorrect email or password")
        if not _password_matches(account.password_hash, password):
            logger.warning("Login failed: wrong password for account %s", account.account_id)
            raise AuthenticationError("Incorrect email or password")

        return self._tokens.issue(
            account_id=account.account_id,
            email=account.email,
            role=account.role,
            name=account.name,
        )


class AccountService:
    """Use case: the account directory (registration, roles, verification, passwords)."""

    def __init__(
        self,
        accounts: AccountRepository,
        permissions: Optional[PermissionRepository] = None,
        *,
        default_password: str,
    ):
        self._accounts = accounts
        self._permissions = permissions
        self._default_password = default_password

    def _create(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role,
        verified: bool,
        duplicate_status: int,
    ) -> Account:
        name = require_length_between(name, "name", NAME_MIN_LENGTH, NAME_MAX_LENGTH)
        email = require_non_empty(email, "email")
        password = require_non_empty(password, "password")

        if self._accounts.email_exists(email):
            logger.warning("Registration rejected: email already in use")
            raise DuplicateEmailError("Email already in use", status_code=duplicate_status)

        account = self._accounts.create_account(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            verified=verified,
        )
        logger.info("Registered %s account %s", role.value, account.account_id)
        return account

    def register(self, *, name: str, email: str, password: str) -> Account:
        return self._create(
            name=name,
            email=email,
            password=password,
            role=Role.USER,
            verified=False,
            duplicate_status=422,
        )

    def register_verificator(self, *, name: str, email: str, password: str) -> Account:
        return self._create(
            name=name,
            email=email,
            password=password,
            role=Role.VERIFIER,
            verified=True,
            duplicate_status=409,
        )

    def find_by_id(self, account_id: str) -> Account:
        account = self._accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError("User not found")
        return account

    def reset_password(self, account_id: str) -> None:
        self.find_by_id(account_id)
        if not self._accounts.update_password(
            account_id, password_hash=generate_password_hash(self._default_password)
        ):
            raise NotFoundError("User not found")
        logger.info("Password reset to default for account %s", account_id)

    def change_own_password(self, account_id: str, *, old_password: str, new_password: str) -> None:
        old_password = require_min_length(old_password, "old_password", PASSWORD_MIN_LENGTH)
        new_password = require_min_length(new_password, "new_password", PASSWORD_MIN_LENGTH)

        account = self.find_by_id(account_id)
        if not _password_matches(account.password_hash, old_password):
            logger.warning("Password change rejected for account %s: old password mismatch", account_id)
            raise ValidationError("Old password is incorrect")

        if not self._accounts.update_password(account_id, password_hash=generate_password_hash(new_password)):
            raise NotFoundError("User not found")

    def promote_to_verificator(self, account_id: str) -> None:
        self.find_by_id(account_id)
        # Role and verified flag change in the same UPDATE.
        if not self._accounts.update_role(account_id, role=Role.VERIFIER, verified=True):
            raise NotFoundError("User not found")
        logger.info("Account %s promoted to verifier", account_id)

    def toggle_verified(self, account_id: str) -> bool:
        account = self.find_by_id(account_id)
        new_value = not account.verified
        if not self._accounts.set_verified(account_id, verified=new_value):
            raise NotFoundError("User not found")
        logger.info("Account %s verified=%s", account_id, new_value)
        return new_value

    def list_accounts(
        self,
        *,
        page: int,
        size: int,
        search: str = "",
        order: SortOrder = SortOrder.DESC,
        allowed_roles: Sequence[Role],
        verified: Optional[bool] = None,
    ) -> Tuple[list[Account], PageMetadata]:
        accounts, total = self._accounts.list_accounts(
            roles=list(allowed_roles),
            search=(search or "").strip(),
            verified=verified,
            order=order,
            limit=size,
            offset=offset_for(page, size),
        )

        if self._permissions is not None and accounts:
            by_owner = self._permissions.list_by_accounts([a.account_id for a in accounts])
            accounts = [replace(a, permissions=tuple(by_owner.get(a.account_id, ()))) for a in accounts]

        return accounts, PageMetadata.build(page=page, size=size, total=total)
