import os


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw and raw.strip() else default


def env_bands(name: str, default=(85.0, 70.0, 55.0, 40.0)) -> tuple:
    # "85,70,55,40" -> lower bounds for A/B/C/D
    raw = os.getenv(name)
    if not raw:
        return tuple(default)
    return tuple(float(v) for v in raw.split(","))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "classroom_db"),
    }
