"""JSON-file storage for the notification log."""

import json
import logging
from datetime import datetime
from pathlib import Path

from client_roster.application.interfaces import NotificationStore
from client_roster.domain.entities import Notification, NotificationKind

logger = logging.getLogger(__name__)


class JsonFileNotificationStore(NotificationStore):
    """Keeps the whole notification list in a single JSON file.

    A missing or corrupt file loads as an empty log; entries that cannot be
    parsed are skipped individually.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Notification]:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read %s — starting with an empty log", self._path)
            return []

        notifications: list[Notification] = []
        for item in raw if isinstance(raw, list) else []:
            try:
                notifications.append(
                    Notification(
                        id=str(item["id"]),
                        kind=NotificationKind(item["kind"]),
                        message=item["message"],
                        timestamp=datetime.fromisoformat(item["timestamp"]),
                        read=bool(item.get("read", False)),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed notification entry: %r", item)
        return notifications

    def save(self, notifications: list[Notification]) -> None:
        payload = [
            {
                "id": n.id,
                "kind": n.kind.value,
                "message": n.message,
                "timestamp": n.timestamp.isoformat(),
                "read": n.read,
            }
            for n in notifications
        ]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
