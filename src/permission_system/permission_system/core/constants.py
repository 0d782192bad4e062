"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 32
PASSWORD_MIN_LENGTH = 6

DEFAULT_TOKEN_TTL_MINUTES = 60 * 24
TOKEN_ALGORITHM = "HS256"

CANCELLED_BY_USER_COMMENT = "Cancelled by user"
