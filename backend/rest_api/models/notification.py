"""
In-app notification model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import NotificationStatus, NotificationType
from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Notification(TimestampMixin, Base):
    """Message addressed to one user; delivery to devices is external."""

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    notification_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=NotificationType.GENERAL
    )
    status: Mapped[str] = mapped_column(
        String(10), nullable=False, default=NotificationStatus.UNREAD, index=True
    )

    user: Mapped["User"] = relationship(back_populates="notifications")
