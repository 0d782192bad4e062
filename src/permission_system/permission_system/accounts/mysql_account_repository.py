from __future__ import annotations

import uuid
from typing import Optional, Sequence, Tuple

from ..core.enums import Role, SortOrder
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Account
from .repository import AccountRepository

_COLUMNS = "account_id, name, email, password_hash, role, verified, created_at"


def _row_to_account(row: dict) -> Account:
    return Account(
        account_id=str(row["account_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        verified=bool(row.get("verified")),
        created_at=row.get("created_at"),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE account_id=%s", (account_id,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def email_exists(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM accounts WHERE email=%s LIMIT 1", (email,))
            return fetchone(cur) is not None

    def create_account(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        verified: bool,
    ) -> Account:
        account_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO accounts(account_id, name, email, password_hash, role, verified)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (account_id, name, email, password_hash, role.value, int(bool(verified))),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE account_id=%s", (account_id,))
            return _row_to_account(fetchone(cur))

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
        if not roles:
            return [], 0

        placeholders, role_params = in_clause([r.value for r in roles])
        clauses = [f"role IN ({placeholders})"]
        params: list[object] = list(role_params)

        if search:
            clauses.append("LOWER(name) LIKE %s")
            params.append(f"%{search.lower()}%")
        if verified is not None:
            clauses.append("verified=%s")
            params.append(int(verified))

        where = " AND ".join(clauses)
        direction = "ASC" if order == SortOrder.ASC else "DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM accounts WHERE {where}", tuple(params))
            total = int(fetchone(cur)["total"])

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM accounts
                WHERE {where}
                ORDER BY created_at {direction}
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_row_to_account(r) for r in fetchall(cur)], total

    def update_role(self, account_id: str, *, role: Role, verified: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET role=%s, verified=%s WHERE account_id=%s",
                (role.value, int(bool(verified)), account_id),
            )
            return cur.rowcount > 0

    def update_password(self, account_id: str, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET password_hash=%s WHERE account_id=%s",
                (password_hash, account_id),
            )
            return cur.rowcount > 0

    def set_verified(self, account_id: str, *, verified: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET verified=%s WHERE account_id=%s",
                (int(bool(verified)), account_id),
            )
            return cur.rowcount > 0
