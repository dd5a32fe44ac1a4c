import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "choir_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

IMPORT_ROW_GROUP_MATCH = os.getenv("IMPORT_ROW_GROUP_MATCH", "prefix")
IMPORT_MATRIX_GROUP_MATCH = os.getenv("IMPORT_MATRIX_GROUP_MATCH", "exact")

EXTRA_STATUS_TOKENS = {}
