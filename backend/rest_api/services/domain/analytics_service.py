"""
Analytics Service - aggregated statistics for the admin dashboard.

Read-only: every method runs COUNT/AVG/GROUP BY queries and returns plain
dicts with camelCase keys.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session

from rest_api.models import (
    Appointment,
    Client,
    Consultation,
    Feedback,
    MealPlan,
    Notification,
    ProgressRecord,
    Trainer,
    User,
    WorkoutPlan,
    utcnow,
)
from shared.config.constants import AppointmentStatus, Limits
from shared.config.logging import get_logger

logger = get_logger(__name__)


def _rate(part: int, total: int) -> float:
    """Percentage rounded to 2 dp, 0 when total is 0."""
    return round(part / total * 100, 2) if total else 0.0


class AnalyticsService:
    """Dashboard aggregations over all tables."""

    def __init__(self, db: Session):
        self._db = db

    def _count(self, model: Any, *criteria: Any) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        return self._db.scalar(query) or 0

    def _grouped(self, column: Any) -> list[tuple[Any, int]]:
        rows = self._db.execute(
            select(column, func.count()).group_by(column).order_by(column)
        ).all()
        return [(value, count) for value, count in rows]

    def _average_rating(self) -> float:
        value = self._db.scalar(select(func.avg(Feedback.rating)))
        return round(float(value), 2) if value is not None else 0.0

    def _active_client_ids(self, since: datetime) -> set[int]:
        return set(
            self._db.scalars(
                select(ProgressRecord.client_id)
                .where(ProgressRecord.progress_date >= since)
                .distinct()
            ).all()
        )

    # =========================================================================
    # Overview
    # =========================================================================

    def dashboard(self) -> dict[str, Any]:
        since = utcnow() - timedelta(days=Limits.ACTIVE_WINDOW_DAYS)
        return {
            "totalUsers": self._count(User),
            "totalTrainers": self._count(Trainer),
            "totalClients": self._count(Client),
            "totalAppointments": self._count(Appointment),
            "totalFeedbacks": self._count(Feedback),
            "averageRating": self._average_rating(),
            "unassignedClients": self._count(Client, Client.trainer_id.is_(None)),
            "recentRegistrations": self._count(User, User.created_at >= since),
        }

    # =========================================================================
    # Users
    # =========================================================================

    def users(self) -> dict[str, Any]:
        since = utcnow() - timedelta(days=Limits.ACTIVE_WINDOW_DAYS)
        return {
            "totalUsers": self._count(User),
            "usersByRole": [
                {"role": role, "count": count} for role, count in self._grouped(User.role)
            ],
            "recentRegistrations": self._count(User, User.created_at >= since),
        }

    def user_growth(self, days: int = 30) -> dict[str, Any]:
        """Registrations per day over the last ``days`` days."""
        since = utcnow() - timedelta(days=days)
        day = func.date(User.created_at)
        rows = self._db.execute(
            select(day.label("date"), User.role, func.count().label("count"))
            .where(User.created_at >= since)
            .group_by(day, User.role)
            .order_by(day)
        ).all()

        daily: dict[str, dict[str, Any]] = {}
        for row in rows:
            entry = daily.setdefault(str(row.date), {"date": str(row.date), "count": 0, "byRole": {}})
            entry["count"] += row.count
            entry["byRole"][row.role] = row.count

        return {"period": {"days": days, "from": since}, "daily": list(daily.values())}

    # =========================================================================
    # Trainers and Clients
    # =========================================================================

    def trainers(self) -> dict[str, Any]:
        by_specialty = self._grouped(Trainer.specialty)
        avg_rating = func.avg(Feedback.rating)
        top = self._db.execute(
            select(
                Trainer.id,
                User.name,
                Trainer.specialty,
                avg_rating.label("rating"),
                func.count(Feedback.id).label("reviews"),
            )
            .join(User, Trainer.user_id == User.id)
            .join(Feedback, Feedback.trainer_id == Trainer.id)
            .group_by(Trainer.id, User.name, Trainer.specialty)
            .order_by(avg_rating.desc(), func.count(Feedback.id).desc(), Trainer.id)
            .limit(Limits.TOP_TRAINERS)
        ).all()

        return {
            "totalTrainers": self._count(Trainer),
            "averageRating": self._average_rating(),
            "trainersBySpecialty": [
                {"specialty": specialty, "count": count} for specialty, count in by_specialty
            ],
            "topTrainers": [
                {
                    "id": row.id,
                    "name": row.name,
                    "specialty": row.specialty,
                    "averageRating": round(float(row.rating), 2),
                    "totalReviews": row.reviews,
                }
                for row in top
            ],
        }

    def clients(self) -> dict[str, Any]:
        total = self._count(Client)
        with_trainer = self._count(Client, Client.trainer_id.is_not(None))
        with_progress = self._db.scalar(
            select(func.count(func.distinct(ProgressRecord.client_id)))
        ) or 0
        active = len(
            self._active_client_ids(utcnow() - timedelta(days=Limits.ACTIVE_WINDOW_DAYS))
        )
        return {
            "totalClients": total,
            "clientsByActivityLevel": [
                {"activityLevel": level, "count": count}
                for level, count in self._grouped(Client.activity_level)
            ],
            "withTrainer": with_trainer,
            "unassigned": total - with_trainer,
            "clientsWithProgress": with_progress,
            "activeClients": active,
            "inactiveClients": total - active,
        }

    # =========================================================================
    # Appointments
    # =========================================================================

    def appointments(self) -> dict[str, Any]:
        total = self._count(Appointment)
        completed = self._count(Appointment, Appointment.status == AppointmentStatus.COMPLETED)
        upcoming = self._count(
            Appointment,
            Appointment.appointment_time >= utcnow(),
            Appointment.status.in_(AppointmentStatus.OPEN),
        )
        return {
            "totalAppointments": total,
            "byStatus": [
                {"status": status, "count": count}
                for status, count in self._grouped(Appointment.status)
            ],
            "completionRate": _rate(completed, total),
            "upcomingAppointments": upcoming,
        }

    def appointment_trends(self, days: int = 30) -> dict[str, Any]:
        """Appointments per day (by appointment time) over the last ``days`` days."""
        since = utcnow() - timedelta(days=days)
        day = func.date(Appointment.appointment_time)
        rows = self._db.execute(
            select(day.label("date"), Appointment.status, func.count().label("count"))
            .where(Appointment.appointment_time >= since)
            .group_by(day, Appointment.status)
            .order_by(day)
        ).all()

        daily: dict[str, dict[str, Any]] = {}
        for row in rows:
            entry = daily.setdefault(str(row.date), {"date": str(row.date), "total": 0, "byStatus": {}})
            entry["total"] += row.count
            entry["byStatus"][row.status] = row.count

        return {"period": {"days": days, "from": since}, "daily": list(daily.values())}

    # =========================================================================
    # System
    # =========================================================================

    def system_health(self) -> dict[str, Any]:
        try:
            self._db.execute(text("SELECT 1"))
            database_status = "healthy"
        except Exception as e:
            logger.error("Database health probe failed", error=str(e))
            database_status = "unhealthy"

        counts: dict[str, int] = {}
        if database_status == "healthy":
            counts = {
                "users": self._count(User),
                "trainers": self._count(Trainer),
                "clients": self._count(Client),
                "mealPlans": self._count(MealPlan),
                "workoutPlans": self._count(WorkoutPlan),
                "appointments": self._count(Appointment),
                "consultations": self._count(Consultation),
                "progressRecords": self._count(ProgressRecord),
                "feedbacks": self._count(Feedback),
                "notifications": self._count(Notification),
            }

        return {
            "database": {"status": database_status, "counts": counts},
            "health": database_status,
            "timestamp": utcnow(),
        }
