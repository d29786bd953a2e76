"""
Notification Service - in-app notifications and device registration.

Notifications are persisted only. Delivery to the registered device token
belongs to the push provider and is not performed here.
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from rest_api.models import Notification, User
from rest_api.repositories import NotificationRepository, UserRepository
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import NotificationStatus, NotificationType
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import NotificationOutput, UserOutput

logger = get_logger(__name__)


class NotificationService(BaseCRUDService[Notification, NotificationOutput]):
    """Service for notifications."""

    non_nullable_fields = ("message", "notification_type", "status")

    def __init__(self, db: Session):
        self._notifications = NotificationRepository(db)
        self._users = UserRepository(db)
        super().__init__(
            db=db,
            model=Notification,
            repository=self._notifications,
            output_schema=NotificationOutput,
            entity_name="Notification",
        )

    # =========================================================================
    # Devices
    # =========================================================================

    def register_device(self, user_id: int, device_token: str) -> UserOutput:
        user = self._get_user(user_id)
        user.device_token = device_token
        self._commit("register device")
        logger.info("Device registered", user_id=user_id)
        return UserOutput.model_validate(user)

    def unregister_device(self, user_id: int) -> None:
        user = self._get_user(user_id)
        user.device_token = None
        self._commit("unregister device")
        logger.info("Device unregistered", user_id=user_id)

    # =========================================================================
    # Inbox
    # =========================================================================

    def list_for_user(
        self, user_id: int, status: str | None = None, limit: int | None = None
    ) -> list[NotificationOutput]:
        self._get_user(user_id)
        notifications = self._notifications.find_by_user(user_id, status)
        if limit is not None:
            notifications = notifications[:limit]
        return [self.to_output(n) for n in notifications]

    def mark_read(self, notification_id: int) -> NotificationOutput:
        return self.update(notification_id, {"status": NotificationStatus.READ})

    def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification of the user as read. Returns the count."""
        self._get_user(user_id)
        result = self._db.execute(
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.status == NotificationStatus.UNREAD,
            )
            .values(status=NotificationStatus.READ)
            .execution_options(synchronize_session="fetch")
        )
        self._commit("mark notifications as read")
        return result.rowcount or 0

    # =========================================================================
    # Sending
    # =========================================================================

    def send(
        self, user_id: int, message: str, notification_type: str = NotificationType.GENERAL
    ) -> NotificationOutput:
        return self.create(
            {"user_id": user_id, "message": message, "notification_type": notification_type}
        )

    def send_bulk(
        self,
        user_ids: Sequence[int],
        message: str,
        notification_type: str = NotificationType.GENERAL,
    ) -> int:
        """Persist one notification per known user. Unknown IDs are skipped."""
        known = self._users.find_by_ids(list(dict.fromkeys(user_ids)))
        return self._persist_many([u.id for u in known], message, notification_type)

    def broadcast(
        self,
        message: str,
        role: str | None = None,
        notification_type: str = NotificationType.GENERAL,
    ) -> int:
        """Persist one notification per user, optionally restricted to a role."""
        query = select(User.id)
        if role:
            query = query.where(User.role == role)
        user_ids = list(self._db.scalars(query).all())
        return self._persist_many(user_ids, message, notification_type)

    def _persist_many(self, user_ids: list[int], message: str, notification_type: str) -> int:
        self._db.add_all(
            Notification(user_id=uid, message=message, notification_type=notification_type)
            for uid in user_ids
        )
        self._commit("send notifications")
        logger.info("Notifications sent", count=len(user_ids), notification_type=notification_type)
        return len(user_ids)

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._get_user(data["user_id"])

    def _get_user(self, user_id: int) -> User:
        user = self._db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
