"""
Trainer Service - trainer profiles and their dashboards.

Business rules:
- A trainer profile belongs to a user with role TRAINER, one per user
- Deleting a trainer unassigns its clients
- Ratings average to 2 decimals, 0 when the trainer has no reviews
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Appointment, ProgressRecord, Trainer, User, utcnow
from rest_api.repositories import (
    AppointmentRepository,
    ClientRepository,
    TrainerRepository,
)
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import AppointmentStatus, AppointmentType, Limits, Roles
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    DuplicateEntityError,
    InvalidRoleError,
    NotFoundError,
    ValidationError,
)
from shared.utils.schemas import (
    AppointmentOutput,
    ClientOutput,
    FeedbackOutput,
    TrainerOutput,
)

logger = get_logger(__name__)

_TYPE_KEYS = {
    AppointmentType.IN_PERSON: "inPerson",
    AppointmentType.VIDEO_CALL: "videoCall",
    AppointmentType.PHONE_CALL: "phoneCall",
    AppointmentType.CHAT: "chat",
}


def count_by_type(appointments: list[Appointment]) -> dict[str, int]:
    """Appointment counts keyed by camelCase type name."""
    counts = {key: 0 for key in _TYPE_KEYS.values()}
    for appointment in appointments:
        key = _TYPE_KEYS.get(appointment.type)
        if key:
            counts[key] += 1
    return counts


class TrainerService(BaseCRUDService[Trainer, TrainerOutput]):
    """Service for trainer profiles."""

    def __init__(self, db: Session):
        self._trainers = TrainerRepository(db)
        super().__init__(
            db=db,
            model=Trainer,
            repository=self._trainers,
            output_schema=TrainerOutput,
            entity_name="Trainer",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_user_id(self, user_id: int) -> TrainerOutput:
        trainer = self._trainers.find_by_user_id(user_id)
        if trainer is None:
            raise NotFoundError("Trainer", user_id=user_id)
        return self.to_output(trainer)

    def get_complete_profile(self, trainer_id: int) -> dict[str, Any]:
        """Trainer with clients, appointments, feedbacks and summary stats."""
        trainer = self.get_entity_or_404(trainer_id)

        feedbacks = sorted(trainer.feedbacks, key=lambda f: (f.created_at, f.id), reverse=True)
        appointments = sorted(
            trainer.appointments, key=lambda a: (a.appointment_time, a.id), reverse=True
        )
        clients = ClientRepository(self._db).find_by_trainer(trainer.id)

        return {
            "trainer": self.to_output(trainer),
            "clients": [ClientOutput.model_validate(c) for c in clients],
            "appointments": [AppointmentOutput.model_validate(a) for a in appointments],
            "feedbacks": [FeedbackOutput.model_validate(f) for f in feedbacks],
            "stats": {
                "averageRating": trainer.average_rating,
                "totalClients": len(clients),
                "totalAppointments": len(appointments),
                "totalReviews": len(feedbacks),
            },
        }

    def get_clients(self, trainer_id: int) -> list[ClientOutput]:
        """Clients assigned to the trainer, each with its latest progress."""
        self.get_entity_or_404(trainer_id)
        clients = ClientRepository(self._db).find_by_trainer(trainer_id)
        return [ClientOutput.model_validate(c) for c in clients]

    def get_schedule(
        self,
        trainer_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Appointments of the trainer in ascending time order.

        Without a range every appointment is returned; ``upcomingAppointments``
        counts those still ahead.
        """
        self.get_entity_or_404(trainer_id)
        if start and end and start > end:
            raise ValidationError("startDate must be on or before endDate")

        appointments = AppointmentRepository(self._db).find_for_trainer(trainer_id, start, end)

        now = utcnow()
        return {
            "appointments": [AppointmentOutput.model_validate(a) for a in appointments],
            "summary": {
                "totalAppointments": len(appointments),
                "upcomingAppointments": sum(1 for a in appointments if a.appointment_time > now),
                "appointmentsByType": count_by_type(appointments),
            },
        }

    def get_metrics(self, trainer_id: int) -> dict[str, Any]:
        """Rating, appointment completion and client activity for one trainer."""
        trainer = self.get_entity_or_404(trainer_id)

        appointments = list(trainer.appointments)
        completed = sum(1 for a in appointments if a.status == AppointmentStatus.COMPLETED)
        completion_rate = round(completed / len(appointments) * 100, 2) if appointments else 0.0

        since = utcnow() - timedelta(days=Limits.ACTIVE_WINDOW_DAYS)
        client_ids = [c.id for c in trainer.clients]
        active_clients = 0
        if client_ids:
            active_clients = len(
                set(
                    self._db.execute(
                        select(ProgressRecord.client_id).where(
                            ProgressRecord.client_id.in_(client_ids),
                            ProgressRecord.progress_date >= since,
                        )
                    ).scalars()
                )
            )

        return {
            "rating": {"average": trainer.average_rating, "total": len(trainer.feedbacks)},
            "appointments": {
                "total": len(appointments),
                "completed": completed,
                "completionRate": completion_rate,
                "byType": count_by_type(appointments),
            },
            "clients": {"total": len(client_ids), "active": active_clients},
        }

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        """The user must exist, be a TRAINER and not have a profile yet."""
        user_id = data["user_id"]
        user = self._db.get(User, user_id)
        if user is None:
            raise ValidationError(
                "Invalid userId. The user must have the TRAINER role.", user_id=user_id
            )
        if user.role != Roles.TRAINER:
            raise InvalidRoleError(user_id, Roles.TRAINER)
        if self._trainers.find_by_user_id(user_id) is not None:
            raise DuplicateEntityError("Trainer profile", f"user {user_id}")

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _get_entity_info(self, entity: Trainer) -> dict[str, Any]:
        return {"id": entity.id, "unassigned_clients": len(entity.clients)}

    def _after_delete(self, entity_info: dict[str, Any]) -> None:
        logger.info(
            "Trainer deleted",
            trainer_id=entity_info["id"],
            unassigned_clients=entity_info["unassigned_clients"],
        )
