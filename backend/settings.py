import os
from pathlib import Path

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent
DEFAULT_OSM_API_BASE_URL = "https://www.openstreetmap.org/api/0.6/node"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self) -> None:
        self.OSM_API_BASE_URL: str = os.getenv("OSM_API_BASE_URL", DEFAULT_OSM_API_BASE_URL)
        self.OSM_TIMEOUT_SECONDS: float = float(os.getenv("OSM_TIMEOUT_SECONDS", "10"))
        self.OSM_USER_AGENT: str = os.getenv("OSM_USER_AGENT", "campus-coffee/0.1")
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL", f"sqlite:///{BACKEND_ROOT / 'app.db'}"
        )
        self.SQL_ECHO: bool = _as_bool(os.getenv("SQL_ECHO"), False)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
