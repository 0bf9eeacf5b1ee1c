from .json_notification_store import JsonFileNotificationStore

__all__ = ["JsonFileNotificationStore"]
