"""Status transitions of a permission request.

    (none) --create--> pending
    pending|revised --verifier/admin--> approved | rejected | revised
    pending|revised --owner edit--> same status
    pending|revised --owner cancel--> cancelled
    pending --owner delete--> removed
"""
from __future__ import annotations

from ..core.enums import PermissionStatus

TERMINAL_STATUSES = frozenset(
    {PermissionStatus.APPROVED, PermissionStatus.REJECTED, PermissionStatus.CANCELLED}
)
DECISION_STATUSES = frozenset(
    {PermissionStatus.APPROVED, PermissionStatus.REJECTED, PermissionStatus.REVISED}
)
EDITABLE_STATUSES = frozenset({PermissionStatus.PENDING, PermissionStatus.REVISED})
CANCELLABLE_STATUSES = EDITABLE_STATUSES
DELETABLE_STATUSES = frozenset({PermissionStatus.PENDING})


def is_terminal(status: PermissionStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_decide(status: PermissionStatus) -> bool:
    return not is_terminal(status)


def can_edit(status: PermissionStatus) -> bool:
    return status in EDITABLE_STATUSES


def can_cancel(status: PermissionStatus) -> bool:
    return status in CANCELLABLE_STATUSES


def can_delete(status: PermissionStatus) -> bool:
    return status in DELETABLE_STATUSES
