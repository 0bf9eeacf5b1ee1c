"""Notification log endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from client_roster.application.schemas import NotificationListResponse, NotificationResponse
from client_roster.application.services import NotificationBus
from client_roster.infrastructure.dependencies import get_notification_bus

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _list_response(bus: NotificationBus) -> NotificationListResponse:
    return NotificationListResponse(
        notifications=[
            NotificationResponse.model_validate(n, from_attributes=True)
            for n in bus.get_all()
        ],
        unread_count=bus.unread_count,
    )


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    bus: NotificationBus = Depends(get_notification_bus),
) -> NotificationListResponse:
    """Newest notifications first, with the unread count."""
    return _list_response(bus)


@router.post("/read-all", response_model=NotificationListResponse)
async def mark_all_read(
    bus: NotificationBus = Depends(get_notification_bus),
) -> NotificationListResponse:
    bus.mark_all_as_read()
    return _list_response(bus)


@router.post("/{notification_id}/read", response_model=NotificationListResponse)
async def mark_read(
    notification_id: str,
    bus: NotificationBus = Depends(get_notification_bus),
) -> NotificationListResponse:
    if not bus.mark_as_read(notification_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification with id '{notification_id}' not found",
        )
    return _list_response(bus)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_notifications(
    bus: NotificationBus = Depends(get_notification_bus),
) -> None:
    bus.clear()
