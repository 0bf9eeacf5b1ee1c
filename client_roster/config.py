import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "GSOS Client Roster API"
    app_version: str = "0.1.0"
    app_env: str = "development"

    # Storage backend — "sql" talks to the database directly, "supabase"
    # goes through the hosted PostgREST API.
    store_backend: Literal["sql", "supabase"] = "sql"
    database_url: str = "sqlite:///./data/client_roster.db"
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_timeout: float = 15.0

    # Dashboard origins allowed to call the API
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5000"]

    # Fernet key protecting the reversible copy of client passwords
    credential_encryption_key: str = ""

    # Echo raw store error text in 500 responses (debugging only)
    expose_error_details: bool = False

    # Notification log and dashboard display settings live here
    data_dir: str = "data"
    notification_limit: int = 50

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_store: str = "INFO"            # SQL / hosted repositories
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — hosted backend calls
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Warn about backend settings that cannot work as configured."""
        if self.store_backend == "supabase" and not (self.supabase_url and self.supabase_key):
            _config_logger.warning(
                "STORE_BACKEND=supabase but SUPABASE_URL / SUPABASE_KEY are not set"
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
