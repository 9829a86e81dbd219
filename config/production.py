import os

from .config import db_config_from_env, env_bands, env_bool, env_int

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
STRICT_ROSTER_LOOKUP = env_bool("STRICT_ROSTER_LOOKUP", True)

BATCH_MAX_WORKERS = env_int("BATCH_MAX_WORKERS", 8)
ATTENDANCE_BANDS = env_bands("ATTENDANCE_BANDS")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", False)
