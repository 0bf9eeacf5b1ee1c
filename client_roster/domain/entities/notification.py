"""Domain entity for dashboard notifications."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class NotificationKind(str, Enum):
    """Event categories shown in the dashboard notification log."""

    CLIENT_CREATED = "client_created"
    CLIENT_DELETED = "client_deleted"
    CLIENT_EDITED = "client_edited"
    PULL_RECORDED = "pull_recorded"
    SYSTEM = "system"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Notification:
    """A single entry in the notification log."""

    kind: NotificationKind
    message: str
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    read: bool = False

    def mark_read(self) -> None:
        self.read = True
