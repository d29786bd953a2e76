"""
User account model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Roles
from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .trainer import Trainer
    from .client import Client
    from .plan import MealPlan, WorkoutPlan
    from .notification import Notification
    from .feedback import Feedback


class User(TimestampMixin, Base):
    """
    A person known to the identity provider.

    ``firebase_uid`` links the row to the provider account and never changes.
    A user with role TRAINER or CLIENT may own the matching profile.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Roles.CLIENT, index=True)
    firebase_uid: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    bio: Mapped[Optional[str]] = mapped_column(Text)
    # Push target registered by the mobile app
    device_token: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    trainer_profile: Mapped[Optional["Trainer"]] = relationship(
        back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    client_profile: Mapped[Optional["Client"]] = relationship(
        back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    meal_plans: Mapped[list["MealPlan"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    workout_plans: Mapped[list["WorkoutPlan"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    notifications: Mapped[list["Notification"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    feedbacks_given: Mapped[list["Feedback"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
