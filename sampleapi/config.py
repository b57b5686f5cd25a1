import os
from pathlib import Path

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///./geosamples.db"
DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "static"

SERVICE_NAME = "Geological Sample Management API"
SERVICE_VERSION = "1.0.0"


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL


def static_dir() -> Path:
    raw = os.environ.get("STATIC_DIR", "").strip()
    return Path(raw) if raw else DEFAULT_STATIC_DIR


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "").strip().upper() or "INFO"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def host() -> str:
    return os.environ.get("HOST", "").strip() or "0.0.0.0"


def port() -> int:
    return int(os.environ.get("PORT", "").strip() or "8080")
