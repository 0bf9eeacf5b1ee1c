from .base import Base
from .session import engine, async_session_factory, get_db_session, enable_sqlite_foreign_keys
from .models import ClientModel, PullHistoryModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "enable_sqlite_foreign_keys",
    "ClientModel",
    "PullHistoryModel",
]
