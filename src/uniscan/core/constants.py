"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_SECONDS = 24 * 60 * 60
TOKEN_ALGORITHM = "HS256"

DEFAULT_PASSWORD_HASH_METHOD = "pbkdf2:sha256:600000"
DEFAULT_PASSWORD_SALT_LENGTH = 16

MAX_CODE_DATA_LENGTH = 512
MAX_USERNAME_LENGTH = 50

# MySQL ER_DUP_ENTRY
MYSQL_DUPLICATE_KEY_ERRNO = 1062
