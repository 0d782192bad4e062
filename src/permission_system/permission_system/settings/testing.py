import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "permission_test_db"),
}

DEFAULT_PASSWORD = "reset-me-123"
TOKEN_TTL_MINUTES = 5

ADMIN_NAME = "Test Admin"
ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin123"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
