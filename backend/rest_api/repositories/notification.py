"""
Notification Repository - Data access for in-app notifications.
"""

from sqlalchemy.orm import Session
from sqlalchemy import Select, select

from rest_api.models import Notification
from .base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification entities."""

    search_columns = ("message",)
    sort_fields = {"status": "status", "notificationType": "notification_type"}
    filter_columns = {
        "user_id": "user_id",
        "status": "status",
        "notification_type": "notification_type",
    }

    @property
    def model(self) -> type[Notification]:
        return Notification

    def _base_query(self) -> Select:
        return select(Notification)

    def find_by_user(self, user_id: int, status: str | None = None) -> list[Notification]:
        query = (
            self._base_query()
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        if status:
            query = query.where(Notification.status == status)
        return list(self._db.execute(query).scalars().all())


def get_notification_repository(db: Session) -> NotificationRepository:
    """Factory function for NotificationRepository."""
    return NotificationRepository(db)
