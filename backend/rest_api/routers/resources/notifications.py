"""
Notification endpoints: CRUD plus device registration, per-user inbox and
sending. Sending persists notifications only; nothing is pushed.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import NotificationService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    BroadcastNotificationRequest,
    BulkNotificationRequest,
    CreatedResponse,
    DataResponse,
    DeviceRegisterRequest,
    MessageResponse,
    NotificationCreate,
    NotificationOutput,
    NotificationStatusType,
    NotificationUpdate,
    SendNotificationRequest,
    UserOutput,
)


router = APIRouter(
    prefix="/api/notifications",
    tags=["notifications"],
    dependencies=[Depends(current_user_context)],
)


def notification_filters(
    user_id: int | None = Query(default=None, alias="userId"),
    notification_status: NotificationStatusType | None = Query(default=None, alias="status"),
    notification_type: str | None = Query(default=None, alias="notificationType"),
) -> dict[str, Any]:
    return {
        "user_id": user_id,
        "status": notification_status,
        "notification_type": notification_type,
    }


# =============================================================================
# Devices
# =============================================================================


@router.post("/device/register", response_model=MessageResponse[UserOutput])
def register_device(body: DeviceRegisterRequest, db: Session = Depends(get_db)) -> dict:
    """Store the push target of a user."""
    user = NotificationService(db).register_device(body.user_id, body.device_token)
    return {"data": user, "message": "Device token registered successfully"}


@router.delete("/device/unregister/{user_id}")
def unregister_device(user_id: int, db: Session = Depends(get_db)) -> dict:
    NotificationService(db).unregister_device(user_id)
    return {"message": "Device token unregistered successfully"}


# =============================================================================
# Inbox
# =============================================================================


@router.get("/user/{user_id}", response_model=DataResponse[list[NotificationOutput]])
def get_user_notifications(
    user_id: int,
    notification_status: NotificationStatusType | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> dict:
    """Notifications of a user, newest first."""
    return {
        "data": NotificationService(db).list_for_user(user_id, notification_status, limit)
    }


@router.put("/user/{user_id}/read-all")
def mark_all_notifications_read(user_id: int, db: Session = Depends(get_db)) -> dict:
    count = NotificationService(db).mark_all_read(user_id)
    return {"message": "All notifications marked as read", "count": count}


@router.put("/{notification_id}/read", response_model=DataResponse[NotificationOutput])
def mark_notification_read(notification_id: int, db: Session = Depends(get_db)) -> dict:
    return {"data": NotificationService(db).mark_read(notification_id)}


# =============================================================================
# Sending
# =============================================================================


@router.post(
    "/send",
    response_model=MessageResponse[NotificationOutput],
    status_code=status.HTTP_201_CREATED,
)
def send_notification(body: SendNotificationRequest, db: Session = Depends(get_db)) -> dict:
    notification = NotificationService(db).send(
        body.user_id, body.message, body.notification_type
    )
    return {"data": notification, "message": "Notification sent successfully"}


@router.post("/send/bulk", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def send_bulk_notification(body: BulkNotificationRequest, db: Session = Depends(get_db)) -> dict:
    """One notification per known user in ``userIds``."""
    created = NotificationService(db).send_bulk(
        body.user_ids, body.message, body.notification_type
    )
    return {"created": created}


@router.post(
    "/send/broadcast", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED
)
def broadcast_notification(
    body: BroadcastNotificationRequest, db: Session = Depends(get_db)
) -> dict:
    """One notification per user, optionally restricted to a role."""
    created = NotificationService(db).broadcast(
        body.message, body.role, body.notification_type
    )
    return {"created": created}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=NotificationService,
        create_schema=NotificationCreate,
        update_schema=NotificationUpdate,
        output_schema=NotificationOutput,
        filters=notification_filters,
    ),
)
