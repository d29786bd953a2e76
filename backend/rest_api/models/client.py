"""
Client profile model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .trainer import Trainer
    from .progress import ProgressRecord
    from .scheduling import Appointment, Consultation


class Client(TimestampMixin, Base):
    """
    Client profile attached to a CLIENT user.

    A client has at most one trainer; ``trainer_id`` NULL means unassigned.
    Meal and workout plans belong to the owning user.
    """

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    trainer_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("trainers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    goals: Mapped[Optional[str]] = mapped_column(Text)
    activity_level: Mapped[Optional[str]] = mapped_column(String(50))
    dietary_preferences: Mapped[Optional[str]] = mapped_column(Text)
    weight: Mapped[Optional[float]] = mapped_column(Float)
    height: Mapped[Optional[float]] = mapped_column(Float)  # cm
    bmi: Mapped[Optional[float]] = mapped_column(Float)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="client_profile")
    trainer: Mapped[Optional["Trainer"]] = relationship(back_populates="clients")
    progress_records: Mapped[list["ProgressRecord"]] = relationship(
        back_populates="client",
        cascade="all, delete-orphan",
        order_by="ProgressRecord.progress_date.desc()",
    )
    appointments: Mapped[list["Appointment"]] = relationship(
        back_populates="client", cascade="all, delete-orphan"
    )
    consultations: Mapped[list["Consultation"]] = relationship(
        back_populates="client", cascade="all, delete-orphan"
    )

    @property
    def is_assigned(self) -> bool:
        return self.trainer_id is not None

    @property
    def latest_progress(self) -> Optional["ProgressRecord"]:
        """Most recent progress record (records are loaded newest first)."""
        return self.progress_records[0] if self.progress_records else None

    @property
    def counts(self) -> dict[str, int]:
        """Related record counts shown in client listings."""
        return {
            "progressRecords": len(self.progress_records),
            "mealPlans": len(self.user.meal_plans) if self.user else 0,
            "workoutPlans": len(self.user.workout_plans) if self.user else 0,
        }
