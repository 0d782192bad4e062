import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "permission_db"),
}

# Password set by the admin reset-password action
DEFAULT_PASSWORD = os.getenv("DEFAULT_PASSWORD", "password123")
TOKEN_TTL_MINUTES = int(os.getenv("TOKEN_TTL_MINUTES", str(60 * 24)))

ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql and seed the admin on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
