from pathlib import Path
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from the repo root .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def database_ssl_mode(url: str, environment: str, verify: bool) -> Optional[str]:
    """Pick the PostgreSQL sslmode for the store connection.

    Returns None for non-PostgreSQL URLs, which take no SSL settings.
    """
    if not url.startswith("postgres"):
        return None
    if verify:
        return "verify-full"
    if environment.lower() == "production":
        return "require"
    return "disable"


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tasks.db")
APP_ENV = os.getenv("APP_ENV", "development")
DATABASE_SSL_VERIFY = env_bool("DATABASE_SSL_VERIFY")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT = float(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_ECHO = env_bool("DB_ECHO")

SCHEMA_INIT_POLICY = os.getenv("SCHEMA_INIT_POLICY", "lenient").strip().lower()
EXPOSE_ERROR_DETAILS = env_bool("EXPOSE_ERROR_DETAILS")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

_cors_origins = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]
