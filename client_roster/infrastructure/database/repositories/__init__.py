from .client_repository import SQLAlchemyClientRepository
from .pull_history_repository import SQLAlchemyPullHistoryRepository

__all__ = [
    "SQLAlchemyClientRepository",
    "SQLAlchemyPullHistoryRepository",
]
