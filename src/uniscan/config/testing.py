import os

SECRET_KEY = "test-secret"

JWT_SECRET = "test-jwt-secret"
TOKEN_TTL_SECONDS = 86400

# Cheap hashing keeps the test suite fast.
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
PASSWORD_SALT_LENGTH = 8

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "uniscan_test"),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_DIR = os.getenv("LOG_DIR", "logs")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
