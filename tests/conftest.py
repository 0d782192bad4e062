from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from permission_system.accounts.model import Account
from permission_system.config import AppConfig
from permission_system.container import assemble
from permission_system.core.enums import PermissionStatus, Role, SortOrder
from permission_system.database.connection import DBConfig
from permission_system.main import create_app
from permission_system.permissions.model import Permission

BASE_TIME = datetime(2026, 2, 1, 8, 0, 0)


class InMemoryAccounts:
    def __init__(self):
        self.by_id: dict[str, Account] = {}
        self._tick = 0

    def _next_time(self) -> datetime:
        self._tick += 1
        return BASE_TIME + timedelta(minutes=self._tick)

    def add(self, *, name, email, password="secret123", role=Role.USER, verified=False) -> Account:
        return self.create_account(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            verified=verified,
        )

    def get_by_id(self, account_id):
        return self.by_id.get(account_id)

    def get_by_email(self, email):
        return next((a for a in self.by_id.values() if a.email == email), None)

    def email_exists(self, email):
        return self.get_by_email(email) is not None

    def create_account(self, *, name, email, password_hash, role, verified):
        account = Account(
            account_id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            verified=verified,
            created_at=self._next_time(),
        )
        self.by_id[account.account_id] = account
        return account

    def list_accounts(self, *, roles, search="", verified=None, order=SortOrder.DESC, limit, offset):
        rows = [a for a in self.by_id.values() if a.role in roles]
        if search:
            rows = [a for a in rows if search.lower() in a.name.lower()]
        if verified is not None:
            rows = [a for a in rows if a.verified == verified]
        rows.sort(key=lambda a: a.created_at, reverse=order == SortOrder.DESC)
        return rows[offset:offset + limit], len(rows)

    def _update(self, account_id, **changes):
        account = self.by_id.get(account_id)
        if not account:
            return False
        self.by_id[account_id] = replace(account, **changes)
        return True

    def update_role(self, account_id, *, role, verified):
        return self._update(account_id, role=role, verified=verified)

    def update_password(self, account_id, *, password_hash):
        return self._update(account_id, password_hash=password_hash)

    def set_verified(self, account_id, *, verified):
        return self._update(account_id, verified=verified)


class InMemoryPermissions:
    def __init__(self, accounts: InMemoryAccounts):
        self._accounts = accounts
        self.by_id: dict[str, Permission] = {}
        self._tick = 0

    def _with_owner(self, perm: Permission) -> Permission:
        owner = self._accounts.get_by_id(perm.account_id)
        return replace(perm, account=owner.summary() if owner else None)

    def create(self, *, account_id, title, reason, start_date, end_date):
        self._tick += 1
        created = BASE_TIME + timedelta(hours=self._tick)
        perm = Permission(
            permission_id=str(uuid.uuid4()),
            account_id=account_id,
            title=title,
            reason=reason,
            start_date=start_date,
            end_date=end_date,
            status=PermissionStatus.PENDING,
            created_at=created,
            updated_at=created,
        )
        self.by_id[perm.permission_id] = perm
        return self._with_owner(perm)

    def get_by_id(self, permission_id):
        perm = self.by_id.get(permission_id)
        return self._with_owner(perm) if perm else None

    def list_by_account(self, account_id):
        rows = [self._with_owner(p) for p in self.by_id.values() if p.account_id == account_id]
        return sorted(rows, key=lambda p: p.created_at, reverse=True)

    def list_by_accounts(self, account_ids):
        return {a: self.list_by_account(a) for a in account_ids if self.list_by_account(a)}

    def list_all(self, *, status=None, order=SortOrder.DESC, limit, offset):
        rows = [self._with_owner(p) for p in self.by_id.values()]
        if status is not None:
            rows = [p for p in rows if p.status.value == status.lower()]
        rows.sort(key=lambda p: p.created_at, reverse=order == SortOrder.DESC)
        return rows[offset:offset + limit], len(rows)

    def update_details(self, permission_id, *, title, reason, start_date, end_date):
        perm = self.by_id.get(permission_id)
        if not perm:
            return False
        self.by_id[permission_id] = replace(
            perm, title=title, reason=reason, start_date=start_date, end_date=end_date
        )
        return True

    def update_status(self, permission_id, *, status, comment):
        perm = self.by_id.get(permission_id)
        if not perm:
            return False
        self.by_id[permission_id] = replace(perm, status=status, comment=comment)
        return True

    def delete(self, permission_id):
        return self.by_id.pop(permission_id, None) is not None


@pytest.fixture
def app_config():
    return AppConfig(
        secret_key="test-secret",
        default_password="reset-me-123",
        db=DBConfig(host="localhost", port=3306, user="root", password="", database="unused"),
        token_ttl_minutes=5,
        testing=True,
        log_level="WARNING",
    )


@pytest.fixture
def accounts_repo():
    return InMemoryAccounts()


@pytest.fixture
def permissions_repo(accounts_repo):
    return InMemoryPermissions(accounts_repo)


@pytest.fixture
def container(app_config, accounts_repo, permissions_repo):
    return assemble(app_config, accounts_repo=accounts_repo, permissions_repo=permissions_repo)


@pytest.fixture
def app(app_config, container):
    return create_app(app_config, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_header(container):
    def _make(account: Account) -> dict:
        token = container.tokens.issue(
            account_id=account.account_id,
            email=account.email,
            role=account.role,
            name=account.name,
        )
        return {"Authorization": f"Bearer {token}"}

    return _make
