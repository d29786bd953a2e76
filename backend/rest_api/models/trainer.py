"""
Trainer profile model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .client import Client
    from .scheduling import Appointment, Consultation
    from .feedback import Feedback


class Trainer(TimestampMixin, Base):
    """
    Trainer profile attached to a TRAINER user.

    Clients reference the trainer; deleting the trainer unassigns them.
    """

    __tablename__ = "trainers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    specialty: Mapped[Optional[str]] = mapped_column(String(255))
    experience_years: Mapped[Optional[int]] = mapped_column(Integer)
    bio: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="trainer_profile")
    clients: Mapped[list["Client"]] = relationship(back_populates="trainer")
    appointments: Mapped[list["Appointment"]] = relationship(
        back_populates="trainer", cascade="all, delete-orphan"
    )
    consultations: Mapped[list["Consultation"]] = relationship(
        back_populates="trainer", cascade="all, delete-orphan"
    )
    feedbacks: Mapped[list["Feedback"]] = relationship(
        back_populates="trainer", cascade="all, delete-orphan"
    )

    @property
    def average_rating(self) -> float:
        """Mean feedback rating rounded to 2 decimals, 0 when unrated."""
        ratings = [f.rating for f in self.feedbacks]
        if not ratings:
            return 0.0
        return round(sum(ratings) / len(ratings), 2)

    @property
    def counts(self) -> dict[str, int]:
        """Related record counts shown in trainer listings."""
        return {
            "clients": len(self.clients),
            "appointments": len(self.appointments),
            "feedbacks": len(self.feedbacks),
        }
