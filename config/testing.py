import os

from .config import db_config_from_env, env_bool

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")
STRICT_ROSTER_LOOKUP = True

BATCH_MAX_WORKERS = 4
ATTENDANCE_BANDS = (85.0, 70.0, 55.0, 40.0)

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", False)
