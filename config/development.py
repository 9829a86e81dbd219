import os

from .config import db_config_from_env, env_bands, env_bool, env_int

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

# mysql | memory
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

# Unknown MSSV at login: reject (True) or issue a provisional student (False, demo only)
STRICT_ROSTER_LOOKUP = env_bool("STRICT_ROSTER_LOOKUP", True)

BATCH_MAX_WORKERS = env_int("BATCH_MAX_WORKERS", 8)
ATTENDANCE_BANDS = env_bands("ATTENDANCE_BANDS")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", True)
