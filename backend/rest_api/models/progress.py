"""
Progress tracking model.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from .client import Client


def compute_bmi(weight: float | None, height_cm: float | None) -> float | None:
    """
    Body mass index from weight (kg) and height (cm), rounded to 2 decimals.

    Returns None when either value is missing or height is not positive.
    """
    if weight is None or not height_cm or height_cm <= 0:
        return None
    height_m = height_cm / 100
    return round(weight / (height_m ** 2), 2)


class ProgressRecord(TimestampMixin, Base):
    """
    Point-in-time body measurement for a client.
    The record with the latest ``progress_date`` is the client's current state.
    """

    __tablename__ = "progress"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[Optional[float]] = mapped_column(Float)  # cm
    bmi: Mapped[Optional[float]] = mapped_column(Float)
    body_fat: Mapped[Optional[float]] = mapped_column(Float)
    muscle_mass: Mapped[Optional[float]] = mapped_column(Float)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    progress_date: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False, index=True
    )

    client: Mapped["Client"] = relationship(back_populates="progress_records")
