from __future__ import annotations

import uuid
from datetime import date
from typing import Optional, Sequence, Tuple

from ..accounts.model import AccountSummary
from ..core.enums import PermissionStatus, Role, SortOrder
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Permission
from .repository import PermissionRepository

_SELECT = """
    SELECT p.permission_id, p.account_id, p.title, p.reason,
           p.start_date, p.end_date, p.comment, p.status,
           p.created_at, p.updated_at,
           a.name AS account_name, a.email AS account_email,
           a.role AS account_role, a.verified AS account_verified
    FROM permissions p
    JOIN accounts a ON a.account_id = p.account_id
"""


def _row_to_permission(r: dict) -> Permission:
    return Permission(
        permission_id=str(r["permission_id"]),
        account_id=str(r["account_id"]),
        title=r["title"],
        reason=r["reason"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=PermissionStatus(r["status"]),
        comment=r.get("comment"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        account=AccountSummary(
            account_id=str(r["account_id"]),
            name=r["account_name"],
            email=r["account_email"],
            role=Role(r["account_role"]),
            verified=bool(r.get("account_verified")),
        ),
    )


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        account_id: str,
        title: str,
        reason: str,
        start_date: date,
        end_date: date,
    ) -> Permission:
        permission_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO permissions(permission_id, account_id, title, reason, start_date, end_date, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    permission_id,
                    account_id,
                    title,
                    reason,
                    start_date,
                    end_date,
                    PermissionStatus.PENDING.value,
                ),
            )
            cur.execute(f"{_SELECT} WHERE p.permission_id=%s", (permission_id,))
            return _row_to_permission(fetchone(cur))

    def get_by_id(self, permission_id: str) -> Optional[Permission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE p.permission_id=%s", (permission_id,))
            r = fetchone(cur)
            return _row_to_permission(r) if r else None

    def list_by_account(self, account_id: str) -> list[Permission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE p.account_id=%s ORDER BY p.created_at DESC",
                (account_id,),
            )
            return [_row_to_permission(r) for r in fetchall(cur)]

    def list_by_accounts(self, account_ids: Sequence[str]) -> dict[str, list[Permission]]:
        if not account_ids:
            return {}

        placeholders, params = in_clause(list(account_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE p.account_id IN ({placeholders}) ORDER BY p.created_at DESC",
                params,
            )
            out: dict[str, list[Permission]] = {}
            for r in fetchall(cur):
                p = _row_to_permission(r)
                out.setdefault(p.account_id, []).append(p)
            return out

    def list_all(
        self,
        *,
        status: Optional[str] = None,
        order: SortOrder = SortOrder.DESC,
        limit: int,
        offset: int,
    ) -> Tuple[list[Permission], int]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("LOWER(p.status)=%s")
            params.append(status.lower())

        where = " AND ".join(clauses)
        direction = "ASC" if order == SortOrder.ASC else "DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM permissions p WHERE {where}", tuple(params))
            total = int(fetchone(cur)["total"])

            cur.execute(
                f"""
                {_SELECT}
                WHERE {where}
                ORDER BY p.created_at {direction}
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_row_to_permission(r) for r in fetchall(cur)], total

    def update_details(
        self,
        permission_id: str,
        *,
        title: str,
        reason: str,
        start_date: date,
        end_date: date,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE permissions
                SET title=%s, reason=%s, start_date=%s, end_date=%s
                WHERE permission_id=%s
                """,
                (title, reason, start_date, end_date, permission_id),
            )
            return cur.rowcount > 0

    def update_status(self, permission_id: str, *, status: PermissionStatus, comment: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE permissions SET status=%s, comment=%s WHERE permission_id=%s",
                (status.value, comment, permission_id),
            )
            return cur.rowcount > 0

    def delete(self, permission_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM permissions WHERE permission_id=%s", (permission_id,))
            return cur.rowcount > 0
