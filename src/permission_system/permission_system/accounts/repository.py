from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import Role, SortOrder
from .model import Account


class AccountRepository(Protocol):
    """Repository interface for Account.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def email_exists(self, email: str) -> bool:
        raise NotImplementedError

    def create_account(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        verified: bool,
    ) -> Account:
        raise NotImplementedError

    def list_accounts(
        self,
        *,
        roles: Sequence[Role],
        search: str = "",
        verified: Optional[bool] = None,
        order: SortOrder = SortOrder.DESC,
        limit: int,
        offset: int,
    ) -> Tuple[list[Account], int]:
        """Return one page of accounts and the total number of matches."""

        raise NotImplementedError

    def update_role(self, account_id: str, *, role: Role, verified: bool) -> bool:
        raise NotImplementedError

    def update_password(self, account_id: str, *, password_hash: str) -> bool:
        raise NotImplementedError

    def set_verified(self, account_id: str, *, verified: bool) -> bool:
        raise NotImplementedError
