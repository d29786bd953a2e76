"""
Appointment and consultation models.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import AppointmentStatus, AppointmentType, Defaults
from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .client import Client
    from .trainer import Trainer


class Appointment(TimestampMixin, Base):
    """Scheduled session between a client and a trainer."""

    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    trainer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    appointment_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AppointmentStatus.PENDING, index=True
    )
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AppointmentType.IN_PERSON
    )
    duration: Mapped[int] = mapped_column(
        Integer, nullable=False, default=Defaults.APPOINTMENT_DURATION
    )
    meeting_link: Mapped[Optional[str]] = mapped_column(Text)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    client: Mapped["Client"] = relationship(back_populates="appointments")
    trainer: Mapped["Trainer"] = relationship(back_populates="appointments")


class Consultation(TimestampMixin, Base):
    """Advisory consultation request between a client and a trainer."""

    __tablename__ = "consultations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    trainer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    scheduled_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AppointmentStatus.PENDING
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)

    client: Mapped["Client"] = relationship(back_populates="consultations")
    trainer: Mapped["Trainer"] = relationship(back_populates="consultations")
