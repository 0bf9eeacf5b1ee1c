from .client_repository import ClientRepository
from .pull_history_repository import PullHistoryRepository
from .credential_protector import CredentialProtector
from .notification_store import NotificationStore

__all__ = [
    "ClientRepository",
    "PullHistoryRepository",
    "CredentialProtector",
    "NotificationStore",
]
