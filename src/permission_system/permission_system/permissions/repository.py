from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import PermissionStatus, SortOrder
from .model import Permission


class PermissionRepository(Protocol):
    def create(
        self,
        *,
        account_id: str,
        title: str,
        reason: str,
        start_date: date,
        end_date: date,
    ) -> Permission:
        """Insert a pending request and return it with the owner summary loaded."""

        raise NotImplementedError

    def get_by_id(self, permission_id: str) -> Optional[Permission]:
        raise NotImplementedError

    def list_by_account(self, account_id: str) -> list[Permission]:
        raise NotImplementedError

    def list_by_accounts(self, account_ids: Sequence[str]) -> dict[str, list[Permission]]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[str] = None,
        order: SortOrder = SortOrder.DESC,
        limit: int,
        offset: int,
    ) -> Tuple[list[Permission], int]:
        raise NotImplementedError

    def update_details(
        self,
        permission_id: str,
        *,
        title: str,
        reason: str,
        start_date: date,
        end_date: date,
    ) -> bool:
        raise NotImplementedError

    def update_status(self, permission_id: str, *, status: PermissionStatus, comment: str) -> bool:
        raise NotImplementedError

    def delete(self, permission_id: str) -> bool:
        raise NotImplementedError
