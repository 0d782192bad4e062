from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Tuple

from ..common.datetime_utils import require_date
from ..common.pagination import PageMetadata, offset_for
from ..common.validators import require_non_empty
from ..core.constants import CANCELLED_BY_USER_COMMENT
from ..core.enums import PermissionStatus, Role, SortOrder
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from . import state_machine
from .model import Permission
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionDetails:
    title: str
    reason: str
    start_date: date
    end_date: date

    @classmethod
    def validate(cls, *, title: Any, reason: Any, start_date: Any, end_date: Any) -> "PermissionDetails":
        title = require_non_empty(title, "title")
        reason = require_non_empty(reason, "reason")
        start = require_date(start_date, "start_date")
        end = require_date(end_date, "end_date")
        if end < start:
            raise ValidationError("end_date must not be before start_date", errors={"end_date": "gte=start_date"})
        return cls(title=title, reason=reason, start_date=start, end_date=end)


class PermissionService:
    """Use case: the permission request lifecycle."""

    def __init__(self, permissions: PermissionRepository):
        self._permissions = permissions

    def _get(self, permission_id: str) -> Permission:
        perm = self._permissions.get_by_id(permission_id)
        if not perm:
            logger.warning("Permission %s not found", permission_id)
            raise NotFoundError("Permission not found")
        return perm

    @staticmethod
    def _require_owner(perm: Permission, owner_id: str, action: str) -> None:
        if perm.account_id != owner_id:
            logger.warning("Account %s tried to %s permission %s it does not own", owner_id, action, perm.permission_id)
            raise ForbiddenError(f"You can only {action} your own permission")

    def create(self, owner_id: str, *, title: Any, reason: Any, start_date: Any, end_date: Any) -> Permission:
        details = PermissionDetails.validate(title=title, reason=reason, start_date=start_date, end_date=end_date)
        perm = self._permissions.create(
            account_id=owner_id,
            title=details.title,
            reason=details.reason,
            start_date=details.start_date,
            end_date=details.end_date,
        )
        logger.info("Permission %s created by account %s", perm.permission_id, owner_id)
        return perm

    def list_mine(self, owner_id: str) -> list[Permission]:
        return self._permissions.list_by_account(owner_id)

    def list_all(
        self,
        *,
        page: int,
        size: int,
        status: Optional[str] = None,
        order: SortOrder = SortOrder.DESC,
    ) -> Tuple[list[Permission], PageMetadata]:
        rows, total = self._permissions.list_all(
            status=status,
            order=order,
            limit=size,
            offset=offset_for(page, size),
        )
        return rows, PageMetadata.build(page=page, size=size, total=total)

    def get_by_id(self, permission_id: str) -> Permission:
        return self._get(permission_id)

    def get_own(self, owner_id: str, permission_id: str) -> Permission:
        perm = self._get(permission_id)
        self._require_owner(perm, owner_id, "view")
        return perm

    def change_status(
        self,
        *,
        actor_role: Role,
        permission_id: str,
        status: PermissionStatus,
        comment: Any,
    ) -> None:
        """Approve, reject or send back for revision. Any verifier/admin may act on any request."""
        if actor_role not in {Role.VERIFIER, Role.ADMIN}:
            raise AuthorizationError("Only verifiers or admins can change a permission status")
        if status not in state_machine.DECISION_STATUSES:
            raise ValidationError(f"Cannot set status to {status.value}")
        comment = require_non_empty(comment, "comment")

        perm = self._get(permission_id)
        if not state_machine.can_decide(perm.status):
            logger.warning("Permission %s is already %s; %s rejected", permission_id, perm.status.value, status.value)
            raise ConflictError(f"Permission is already {perm.status.value}")

        if not self._permissions.update_status(permission_id, status=status, comment=comment):
            raise NotFoundError("Permission not found")
        logger.info("Permission %s -> %s", permission_id, status.value)

    def update(
        self,
        owner_id: str,
        permission_id: str,
        *,
        title: Any,
        reason: Any,
        start_date: Any,
        end_date: Any,
    ) -> None:
        details = PermissionDetails.validate(title=title, reason=reason, start_date=start_date, end_date=end_date)

        perm = self._get(permission_id)
        self._require_owner(perm, owner_id, "update")
        if not state_machine.can_edit(perm.status):
            raise ForbiddenError("Permission cannot be updated in current status")

        ok = self._permissions.update_details(
            permission_id,
            title=details.title,
            reason=details.reason,
            start_date=details.start_date,
            end_date=details.end_date,
        )
        if not ok:
            raise NotFoundError("Permission not found")

    def cancel(self, owner_id: str, permission_id: str) -> None:
        perm = self._get(permission_id)
        self._require_owner(perm, owner_id, "cancel")
        if not state_machine.can_cancel(perm.status):
            raise ForbiddenError("Permission can't be cancelled")

        if not self._permissions.update_status(
            permission_id,
            status=PermissionStatus.CANCELLED,
            comment=CANCELLED_BY_USER_COMMENT,
        ):
            raise NotFoundError("Permission not found")
        logger.info("Permission %s cancelled by owner", permission_id)

    def delete(self, owner_id: str, permission_id: str) -> None:
        perm = self._get(permission_id)
        self._require_owner(perm, owner_id, "delete")
        if not state_machine.can_delete(perm.status):
            raise ForbiddenError("Only pending permission can be deleted")

        if not self._permissions.delete(permission_id):
            raise NotFoundError("Permission not found")
        logger.info("Permission %s deleted by owner", permission_id)
