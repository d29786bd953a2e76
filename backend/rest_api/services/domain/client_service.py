"""
Client Service - client profiles, trainer assignment and client dashboards.

Business rules:
- A client profile belongs to a user with role CLIENT, one per user
- A client has at most one trainer; a null trainerId means unassigned
- Meal and workout plans are owned by the client's user
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Client, Trainer, User
from rest_api.repositories import (
    AppointmentRepository,
    ClientRepository,
    MealPlanRepository,
    NotificationRepository,
    ProgressRepository,
    WorkoutPlanRepository,
)
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import Limits, Roles
from shared.config.logging import get_logger
from shared.utils.exceptions import DuplicateEntityError, InvalidRoleError, NotFoundError, ValidationError
from shared.utils.schemas import (
    AppointmentOutput,
    ClientOutput,
    MealPlanOutput,
    NotificationOutput,
    ProgressOutput,
    WorkoutPlanOutput,
)

logger = get_logger(__name__)

# Records shown in the complete profile
PROFILE_HISTORY_LIMIT = 10


def progress_trends(records_desc: list) -> dict[str, Any] | None:
    """
    Change between the oldest and newest record of a newest-first list.

    Returns None when there are no records.
    """
    if not records_desc:
        return None

    latest, oldest = records_desc[0], records_desc[-1]
    weight_change = round(latest.weight - oldest.weight, 2)
    bmi_change = round((latest.bmi or 0) - (oldest.bmi or 0), 2)

    if weight_change > 0:
        direction = "gain"
    elif weight_change < 0:
        direction = "loss"
    else:
        direction = "stable"

    return {
        "weightChange": weight_change,
        "bmiChange": bmi_change,
        "direction": direction,
        "timeRange": {"from": oldest.progress_date, "to": latest.progress_date},
    }


class ClientService(BaseCRUDService[Client, ClientOutput]):
    """Service for client profiles."""

    def __init__(self, db: Session):
        self._clients = ClientRepository(db)
        super().__init__(
            db=db,
            model=Client,
            repository=self._clients,
            output_schema=ClientOutput,
            entity_name="Client",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_user_id(self, user_id: int) -> ClientOutput:
        client = self._clients.find_by_user_id(user_id)
        if client is None:
            raise NotFoundError("Client", user_id=user_id)
        return self.to_output(client)

    def get_complete_profile(self, client_id: int) -> dict[str, Any]:
        """Client with trainer, plans, recent progress and appointments."""
        client = self.get_entity_or_404(client_id)

        progress = list(client.progress_records)
        appointments = AppointmentRepository(self._db).find_recent_for_client(
            client.id, PROFILE_HISTORY_LIMIT
        )
        workout_plans = WorkoutPlanRepository(self._db).find_by_user(client.user_id)
        meal_plans = MealPlanRepository(self._db).find_by_user(client.user_id)

        progress_stats = None
        if progress:
            progress_stats = {
                "currentWeight": progress[0].weight,
                "currentBMI": progress[0].bmi,
                "totalEntries": len(progress),
                "lastUpdated": progress[0].progress_date,
            }

        return {
            "client": self.to_output(client),
            "workoutPlans": [WorkoutPlanOutput.model_validate(p) for p in workout_plans],
            "mealPlans": [MealPlanOutput.model_validate(p) for p in meal_plans],
            "progress": [
                ProgressOutput.model_validate(p) for p in progress[:PROFILE_HISTORY_LIMIT]
            ],
            "appointments": [AppointmentOutput.model_validate(a) for a in appointments],
            "progressStats": progress_stats,
            "stats": {
                "totalWorkoutPlans": len(workout_plans),
                "totalMealPlans": len(meal_plans),
                "totalAppointments": len(client.appointments),
                "totalFeedbacks": len(client.user.feedbacks_given) if client.user else 0,
            },
        }

    def get_plans(self, client_id: int) -> dict[str, Any]:
        client = self.get_entity_or_404(client_id)
        return {
            "workoutPlans": [
                WorkoutPlanOutput.model_validate(p)
                for p in WorkoutPlanRepository(self._db).find_by_user(client.user_id)
            ],
            "mealPlans": [
                MealPlanOutput.model_validate(p)
                for p in MealPlanRepository(self._db).find_by_user(client.user_id)
            ],
        }

    def get_progress(self, client_id: int, limit: int = 30) -> dict[str, Any]:
        """Latest ``limit`` records (newest first) with the change across them."""
        self.get_entity_or_404(client_id)
        records = ProgressRepository(self._db).find_by_client(client_id, limit=limit)
        return {
            "progress": [ProgressOutput.model_validate(r) for r in records],
            "trends": progress_trends(records),
        }

    def get_activities(self, client_id: int) -> dict[str, Any]:
        """Last few appointments, progress records and notifications."""
        client = self.get_entity_or_404(client_id)
        count = Limits.RECENT_ACTIVITY_ITEMS

        appointments = AppointmentRepository(self._db).find_recent_for_client(client.id, count)
        progress = ProgressRepository(self._db).find_by_client(client.id, limit=count)
        notifications = NotificationRepository(self._db).find_by_user(client.user_id)[:count]

        return {
            "appointments": [AppointmentOutput.model_validate(a) for a in appointments],
            "progress": [ProgressOutput.model_validate(p) for p in progress],
            "notifications": [NotificationOutput.model_validate(n) for n in notifications],
        }

    def get_appointments(self, client_id: int, status: str | None = None) -> list[AppointmentOutput]:
        client = self.get_entity_or_404(client_id)
        appointments = sorted(
            client.appointments, key=lambda a: (a.appointment_time, a.id), reverse=True
        )
        if status:
            appointments = [a for a in appointments if a.status == status]
        return [AppointmentOutput.model_validate(a) for a in appointments]

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        """The user must exist, be a CLIENT and not have a profile yet."""
        user_id = data["user_id"]
        user = self._db.get(User, user_id)
        if user is None:
            raise ValidationError(
                "Invalid userId. The user must have the CLIENT role.", user_id=user_id
            )
        if user.role != Roles.CLIENT:
            raise InvalidRoleError(user_id, Roles.CLIENT)
        if self._clients.find_by_user_id(user_id) is not None:
            raise DuplicateEntityError("Client profile", f"user {user_id}")

        self._check_trainer(data.get("trainer_id"))

    def _validate_update(self, entity: Client, data: dict[str, Any]) -> None:
        self._check_trainer(data.get("trainer_id"))

    def _check_trainer(self, trainer_id: int | None) -> None:
        if trainer_id is not None and self._db.get(Trainer, trainer_id) is None:
            raise NotFoundError("Trainer", trainer_id)

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _after_update(self, entity: Client, old_values: dict[str, Any]) -> None:
        if "trainer_id" in old_values and old_values["trainer_id"] != entity.trainer_id:
            logger.info(
                "Client trainer changed",
                client_id=entity.id,
                old_trainer_id=old_values["trainer_id"],
                new_trainer_id=entity.trainer_id,
            )
