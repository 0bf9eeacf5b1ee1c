"""Notification bus — bounded, persisted event log with explicit listeners."""

import logging
from collections.abc import Callable

from client_roster.application.interfaces import NotificationStore
from client_roster.domain.entities import Notification, NotificationKind

logger = logging.getLogger(__name__)

Listener = Callable[[list[Notification]], None]

DEFAULT_LIMIT = 50

_MESSAGE_TEMPLATES: dict[NotificationKind, str] = {
    NotificationKind.CLIENT_CREATED: 'Client "{subject}" has been successfully added',
    NotificationKind.CLIENT_DELETED: 'Client "{subject}" has been deleted',
    NotificationKind.CLIENT_EDITED: 'Client "{subject}" has been updated',
    NotificationKind.PULL_RECORDED: 'New pull recorded for client "{subject}"',
}


class NotificationBus:
    """Keeps the newest ``limit`` notifications and fans changes out to listeners.

    Every mutation persists the full list through the store and then calls
    each subscribed listener with a snapshot. ``subscribe`` returns the
    matching unsubscribe callable.
    """

    def __init__(self, store: NotificationStore, limit: int = DEFAULT_LIMIT) -> None:
        self._store = store
        self._limit = limit
        self._listeners: list[Listener] = []
        self._notifications: list[Notification] = store.load()[:limit]

    def publish(self, kind: NotificationKind, subject: str) -> Notification:
        """Add a notification; client events are rendered from a template."""
        template = _MESSAGE_TEMPLATES.get(kind)
        message = template.format(subject=subject) if template else subject
        notification = Notification(kind=kind, message=message)

        self._notifications.insert(0, notification)
        del self._notifications[self._limit:]
        self._commit()
        return notification

    def get_all(self) -> list[Notification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def mark_as_read(self, notification_id: str) -> bool:
        for notification in self._notifications:
            if notification.id == notification_id:
                notification.mark_read()
                self._commit()
                return True
        return False

    def mark_all_as_read(self) -> None:
        for notification in self._notifications:
            notification.mark_read()
        self._commit()

    def clear(self) -> None:
        self._notifications.clear()
        self._commit()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _commit(self) -> None:
        self._store.save(self._notifications)
        snapshot = self.get_all()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Notification listener %r failed", listener)
