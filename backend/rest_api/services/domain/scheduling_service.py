"""
Scheduling Services - appointments and consultations.

Both reference a client and a trainer that must exist. Statuses and
appointment types are validated by the request schemas.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Appointment, Client, Consultation, Trainer
from rest_api.repositories import AppointmentRepository, ConsultationRepository
from rest_api.services.base_service import BaseCRUDService
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import AppointmentOutput, ConsultationOutput

logger = get_logger(__name__)


def _check_participants(db: Session, data: dict[str, Any]) -> None:
    if "client_id" in data and db.get(Client, data["client_id"]) is None:
        raise NotFoundError("Client", data["client_id"])
    if "trainer_id" in data and db.get(Trainer, data["trainer_id"]) is None:
        raise NotFoundError("Trainer", data["trainer_id"])


class AppointmentService(BaseCRUDService[Appointment, AppointmentOutput]):
    """Service for appointments."""

    non_nullable_fields = ("appointment_time", "status", "type", "duration")

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Appointment,
            repository=AppointmentRepository(db),
            output_schema=AppointmentOutput,
            entity_name="Appointment",
        )

    def _validate_create(self, data: dict[str, Any]) -> None:
        _check_participants(self._db, data)

    def _after_update(self, entity: Appointment, old_values: dict[str, Any]) -> None:
        if "status" in old_values and old_values["status"] != entity.status:
            logger.info(
                "Appointment status changed",
                appointment_id=entity.id,
                old_status=old_values["status"],
                new_status=entity.status,
            )


class ConsultationService(BaseCRUDService[Consultation, ConsultationOutput]):
    """Service for consultations."""

    non_nullable_fields = ("scheduled_at", "status")

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Consultation,
            repository=ConsultationRepository(db),
            output_schema=ConsultationOutput,
            entity_name="Consultation",
        )

    def _validate_create(self, data: dict[str, Any]) -> None:
        _check_participants(self._db, data)
