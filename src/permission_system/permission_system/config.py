from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from types import ModuleType
from typing import Optional

from .core.constants import DEFAULT_TOKEN_TTL_MINUTES
from .database.connection import DBConfig
from .settings import get_settings_module


@dataclass(frozen=True)
class AdminSeed:
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class AppConfig:
    """Explicit application configuration, passed to the container and app factory."""

    secret_key: str
    default_password: str
    db: DBConfig
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES
    debug: bool = False
    testing: bool = False
    log_level: str = "INFO"
    auto_init_db: bool = False
    admin: Optional[AdminSeed] = field(default=None, repr=False)
    settings_module: str = ""

    @property
    def db_config(self) -> dict:
        return {
            "host": self.db.host,
            "port": self.db.port,
            "user": self.db.user,
            "password": self.db.password,
            "database": self.db.database,
        }


def config_from_settings(settings: ModuleType) -> AppConfig:
    admin = None
    if getattr(settings, "ADMIN_EMAIL", None):
        admin = AdminSeed(
            name=getattr(settings, "ADMIN_NAME", "Administrator"),
            email=settings.ADMIN_EMAIL,
            password=getattr(settings, "ADMIN_PASSWORD", ""),
        )

    return AppConfig(
        secret_key=getattr(settings, "SECRET_KEY"),
        default_password=getattr(settings, "DEFAULT_PASSWORD"),
        db=DBConfig.from_dict(getattr(settings, "DB_CONFIG")),
        token_ttl_minutes=int(getattr(settings, "TOKEN_TTL_MINUTES", DEFAULT_TOKEN_TTL_MINUTES)),
        debug=bool(getattr(settings, "DEBUG", False)),
        testing=bool(getattr(settings, "TESTING", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        admin=admin,
        settings_module=settings.__name__,
    )


def load_config(settings_module: Optional[str] = None) -> AppConfig:
    module_name = settings_module or get_settings_module()
    return config_from_settings(importlib.import_module(module_name))
