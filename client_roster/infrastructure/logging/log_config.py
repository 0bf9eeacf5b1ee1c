"""Logging setup for the roster service.

Levels come from Settings, one field per logger family, so the noisy
driver loggers can stay quiet while the store adapters report at INFO:

    LOG_LEVEL            root logger
    LOG_LEVEL_STORE      SQL and hosted repositories (client_roster.infrastructure.*)
    LOG_LEVEL_SQL        sqlalchemy / aiosqlite / asyncpg
    LOG_LEVEL_HTTP       httpx / httpcore (hosted backend traffic)
    LOG_LEVEL_UVICORN    uvicorn server and access logs
"""

import logging
import sys

from client_roster.config import Settings, get_settings

LOGGER_FAMILIES: dict[str, tuple[str, ...]] = {
    "log_level_store": (
        "client_roster.infrastructure.database",
        "client_roster.infrastructure.supabase",
    ),
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
}

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels; returns ``{logger name: level}`` as set.

    Called once from the application lifespan.
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handlers; scripts and tests may not have any
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field_name, logger_names in LOGGER_FAMILIES.items():
        level = _parse_level(getattr(settings, field_name))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Log levels: root=%s store=%s sql=%s http=%s uvicorn=%s",
        settings.log_level,
        settings.log_level_store,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_uvicorn,
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
