"""
Scheduling Repositories - Data access for appointments and consultations.
"""

from datetime import datetime

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select

from rest_api.models import Appointment, Client, Consultation, Trainer
from .base import BaseRepository


class AppointmentRepository(BaseRepository[Appointment]):
    """
    Repository for Appointment entities.

    Guarantees eager loading of:
    - client with its user
    - trainer with its user
    """

    search_columns = ("notes",)
    sort_fields = {
        "appointmentTime": "appointment_time",
        "status": "status",
        "type": "type",
        "duration": "duration",
    }
    filter_columns = {
        "client_id": "client_id",
        "trainer_id": "trainer_id",
        "status": "status",
        "type": "type",
    }

    @property
    def model(self) -> type[Appointment]:
        return Appointment

    def _base_query(self) -> Select:
        return select(Appointment).options(
            selectinload(Appointment.client).selectinload(Client.user),
            selectinload(Appointment.trainer).selectinload(Trainer.user),
        )

    def find_for_trainer(
        self,
        trainer_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Appointment]:
        """Appointments of a trainer within an optional range, soonest first."""
        query = (
            self._base_query()
            .where(Appointment.trainer_id == trainer_id)
            .order_by(Appointment.appointment_time.asc(), Appointment.id.asc())
        )
        if start is not None:
            query = query.where(Appointment.appointment_time >= start)
        if end is not None:
            query = query.where(Appointment.appointment_time <= end)
        return list(self._db.execute(query).scalars().unique().all())

    def find_recent_for_client(self, client_id: int, limit: int) -> list[Appointment]:
        """Latest appointments of a client by appointment time."""
        query = (
            self._base_query()
            .where(Appointment.client_id == client_id)
            .order_by(Appointment.appointment_time.desc(), Appointment.id.desc())
            .limit(limit)
        )
        return list(self._db.execute(query).scalars().unique().all())


class ConsultationRepository(BaseRepository[Consultation]):
    """
    Repository for Consultation entities.

    Guarantees eager loading of:
    - client with its user
    - trainer with its user
    """

    search_columns = ("notes",)
    sort_fields = {"scheduledAt": "scheduled_at", "status": "status"}
    filter_columns = {"client_id": "client_id", "trainer_id": "trainer_id", "status": "status"}

    @property
    def model(self) -> type[Consultation]:
        return Consultation

    def _base_query(self) -> Select:
        return select(Consultation).options(
            selectinload(Consultation.client).selectinload(Client.user),
            selectinload(Consultation.trainer).selectinload(Trainer.user),
        )


def get_appointment_repository(db: Session) -> AppointmentRepository:
    """Factory function for AppointmentRepository."""
    return AppointmentRepository(db)


def get_consultation_repository(db: Session) -> ConsultationRepository:
    """Factory function for ConsultationRepository."""
    return ConsultationRepository(db)
