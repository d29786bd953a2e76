"""
Meal and workout plan models.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, Boolean, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Defaults
from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class MealPlan(TimestampMixin, Base):
    """
    Nutrition plan owned by a user, made of individual meals.
    Macro totals are entered by the trainer, not summed from meals.
    """

    __tablename__ = "meal_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, default=Defaults.MEAL_PLAN_CATEGORY
    )
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    calories: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    protein: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    fat: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    carbs: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)

    user: Mapped["User"] = relationship(back_populates="meal_plans")
    meals: Mapped[list["Meal"]] = relationship(
        back_populates="meal_plan", cascade="all, delete-orphan", order_by="Meal.id"
    )


class Meal(TimestampMixin, Base):
    """Single meal inside a meal plan."""

    __tablename__ = "meals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    meal_plan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default=Defaults.MEAL_TYPE)
    ingredients: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    calories: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    protein: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    image_url: Mapped[Optional[str]] = mapped_column(Text)

    meal_plan: Mapped["MealPlan"] = relationship(back_populates="meals")


class WorkoutPlan(TimestampMixin, Base):
    """Training plan owned by a user."""

    __tablename__ = "workout_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, default=Defaults.WORKOUT_CATEGORY
    )
    duration: Mapped[int] = mapped_column(
        Integer, nullable=False, default=Defaults.WORKOUT_DURATION
    )
    difficulty: Mapped[str] = mapped_column(
        String(50), nullable=False, default=Defaults.WORKOUT_DIFFICULTY
    )
    exercises: Mapped[Optional[str]] = mapped_column(Text)
    sets: Mapped[Optional[int]] = mapped_column(Integer)
    reps: Mapped[Optional[int]] = mapped_column(Integer)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)

    user: Mapped["User"] = relationship(back_populates="workout_plans")
