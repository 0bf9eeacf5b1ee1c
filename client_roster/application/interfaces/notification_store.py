"""Abstract interface for persisting the notification log."""

from abc import ABC, abstractmethod

from client_roster.domain.entities import Notification


class NotificationStore(ABC):
    """Port for loading and saving the whole (bounded) notification list."""

    @abstractmethod
    def load(self) -> list[Notification]:
        ...

    @abstractmethod
    def save(self, notifications: list[Notification]) -> None:
        ...
