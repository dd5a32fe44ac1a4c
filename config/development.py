import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "choir_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo roster on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Group-hint matching for imports: "prefix" (exact or starts-with, only for
# duplicate names) or "exact" (checked whenever a hint is given).
IMPORT_ROW_GROUP_MATCH = os.getenv("IMPORT_ROW_GROUP_MATCH", "prefix")
IMPORT_MATRIX_GROUP_MATCH = os.getenv("IMPORT_MATRIX_GROUP_MATCH", "exact")

# Extra status synonyms merged into the normalizer table, e.g. {"V": "PRESENT"}.
EXTRA_STATUS_TOKENS = {}
