from .client import Client, ensure_utc
from .pull_history_entry import PullHistoryEntry
from .notification import Notification, NotificationKind
from .roster_analytics import (
    HealthScore,
    HealthStatus,
    PullStatus,
    RosterAnalytics,
    RosterFilter,
)

__all__ = [
    "Client",
    "ensure_utc",
    "PullHistoryEntry",
    "Notification",
    "NotificationKind",
    "HealthScore",
    "HealthStatus",
    "PullStatus",
    "RosterAnalytics",
    "RosterFilter",
]
