from __future__ import annotations

from dataclasses import dataclass

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import AccountService, AuthService
from .config import AppConfig
from .core.tokens import TokenService
from .database.connection import DatabaseConnection
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.repository import PermissionRepository
from .permissions.service import PermissionService


@dataclass(frozen=True)
class Container:
    accounts_repo: AccountRepository
    permissions_repo: PermissionRepository

    tokens: TokenService
    auth_service: AuthService
    account_service: AccountService
    permission_service: PermissionService


def assemble(
    config: AppConfig,
    *,
    accounts_repo: AccountRepository,
    permissions_repo: PermissionRepository,
) -> Container:
    tokens = TokenService(secret_key=config.secret_key, ttl_minutes=config.token_ttl_minutes)
    return Container(
        accounts_repo=accounts_repo,
        permissions_repo=permissions_repo,
        tokens=tokens,
        auth_service=AuthService(accounts_repo, tokens),
        account_service=AccountService(
            accounts_repo,
            permissions_repo,
            default_password=config.default_password,
        ),
        permission_service=PermissionService(permissions_repo),
    )


def build_container(config: AppConfig) -> Container:
    conn = DatabaseConnection(config.db)
    return assemble(
        config,
        accounts_repo=MySQLAccountRepository(conn),
        permissions_repo=MySQLPermissionRepository(conn),
    )
