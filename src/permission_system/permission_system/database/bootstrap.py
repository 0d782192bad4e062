from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[Path] = None) -> None:
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_admin_account(db_config: dict, *, name: str, email: str, password: str) -> None:
    """Create the initial admin, or reset its name/password/role when the email already exists.

    Admins cannot be created through the API, so this is the only way in.
    """
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        password_hash = generate_password_hash(password)

        cur.execute("SELECT account_id FROM accounts WHERE email=%s", (email,))
        existing = cur.fetchone()
        if existing:
            cur.execute(
                """
                UPDATE accounts
                SET name=%s, password_hash=%s, role=%s, verified=1
                WHERE email=%s
                """,
                (name, password_hash, Role.ADMIN.value, email),
            )
        else:
            cur.execute(
                """
                INSERT INTO accounts (account_id, name, email, password_hash, role, verified)
                VALUES (%s, %s, %s, %s, %s, 1)
                """,
                (str(uuid.uuid4()), name, email, password_hash, Role.ADMIN.value),
            )
        conn.commit()
        logger.info("Admin account ready: %s", email)
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
