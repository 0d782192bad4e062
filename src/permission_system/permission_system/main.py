from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .accounts.controller import register as register_accounts
from .common.errors import register_error_handlers
from .config import AppConfig, load_config
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_account, list_tables
from .permissions.controller import register as register_permissions

logger = logging.getLogger(__name__)


def _configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _bootstrap_database(config: AppConfig) -> None:
    db_config = config.db_config
    apply_schema(db_config)
    logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if config.admin is not None:
        ensure_admin_account(
            db_config,
            name=config.admin.name,
            email=config.admin.email,
            password=config.admin.password,
        )


def create_app(config: Optional[AppConfig] = None, *, container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``config`` defaults to the settings module selected by ``APP_ENV``; pass a
    prebuilt ``container`` to run against other repositories (tests do).
    """
    load_dotenv(override=False)
    config = config or load_config()
    _configure_logging(config)

    app = Flask(__name__)
    app.config["DEBUG"] = config.debug
    app.config["TESTING"] = config.testing
    app.config["APP_CONFIG"] = config

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        config.settings_module,
        config.db.user,
        config.db.host,
        config.db.port,
        config.db.database,
    )

    if container is None:
        if config.auto_init_db:
            _bootstrap_database(config)
        container = build_container(config)

    register_error_handlers(app)
    register_accounts(app, container)
    register_permissions(app, container)

    return app
