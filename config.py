# config.py (settings for the tuition calculator)
import os
from dataclasses import dataclass

REQUIRED_KEYS = ("DB_HOST", "DB_USER", "DB_PASS", "DB_NAME", "HOST", "PORT")


class ConfigError(Exception):
    """Raised when the server cannot be configured; startup must stop."""


@dataclass(frozen=True)
class Settings:
    db_host: str
    db_user: str
    db_pass: str
    db_name: str
    db_port: int
    pool_size: int
    host: str
    port: int
    app_name: str
    error_status: int


# ---------------------------------------------------
# Load DB config from external properties file
# ---------------------------------------------------
def load_db_config(filename="db.properties"):
    cfg = {}
    with open(filename) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                raise ConfigError(f"Malformed line in {filename}: {line!r}")
            key, value = line.split("=", 1)
            cfg[key.strip()] = value.strip()
    return cfg


def _int_value(cfg, key, default=None):
    raw = cfg.get(key, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {raw!r}")


def load_settings(filename="db.properties", environ=None) -> Settings:
    """
    Merge the properties file with the environment (environment wins).

    The file is optional as long as the environment provides every
    required key.
    """
    environ = os.environ if environ is None else environ
    cfg = {}
    if os.path.exists(filename):
        cfg.update(load_db_config(filename))
    for key in REQUIRED_KEYS + ("DB_PORT", "DB_POOL_SIZE", "APP_NAME", "ERROR_STATUS"):
        if environ.get(key):
            cfg[key] = environ[key]

    missing = [k for k in REQUIRED_KEYS if not cfg.get(k)]
    if missing:
        raise ConfigError(f"Missing configuration values: {', '.join(missing)}")

    return Settings(
        db_host=cfg["DB_HOST"],
        db_user=cfg["DB_USER"],
        db_pass=cfg["DB_PASS"],
        db_name=cfg["DB_NAME"],
        db_port=_int_value(cfg, "DB_PORT", 3306),
        pool_size=_int_value(cfg, "DB_POOL_SIZE", 5),
        host=cfg["HOST"],
        port=_int_value(cfg, "PORT"),
        app_name=cfg.get("APP_NAME", "Tuition Calculator"),
        error_status=_int_value(cfg, "ERROR_STATUS", 200),
    )
