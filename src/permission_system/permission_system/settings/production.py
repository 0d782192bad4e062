import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "permission_db"),
}

DEFAULT_PASSWORD = os.getenv("DEFAULT_PASSWORD", "please-set-DEFAULT_PASSWORD")
TOKEN_TTL_MINUTES = int(os.getenv("TOKEN_TTL_MINUTES", "60"))

ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "please-set-ADMIN_PASSWORD")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
