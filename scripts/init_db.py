from __future__ import annotations

from dotenv import load_dotenv

from permission_system.config import load_config
from permission_system.database.bootstrap import apply_schema, ensure_admin_account, list_tables


def main() -> None:
    load_dotenv(override=False)
    config = load_config()
    db_config = config.db_config

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )

    if config.admin is not None:
        ensure_admin_account(
            db_config,
            name=config.admin.name,
            email=config.admin.email,
            password=config.admin.password,
        )
        print(f"OK: Admin account ready -> {config.admin.email}")


if __name__ == "__main__":
    main()
