"""Pydantic DTOs for the notification log."""

from datetime import datetime

from pydantic import BaseModel

from client_roster.domain.entities import NotificationKind


class NotificationResponse(BaseModel):
    id: str
    kind: NotificationKind
    message: str
    timestamp: datetime
    read: bool

    model_config = {"from_attributes": True}


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int
