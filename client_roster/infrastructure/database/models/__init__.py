from .client import ClientModel
from .pull_history import PullHistoryModel

__all__ = [
    "ClientModel",
    "PullHistoryModel",
]
