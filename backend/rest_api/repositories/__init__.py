"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from rest_api.repositories import ClientRepository, RepositoryFilters

    repo = ClientRepository(db)
    clients, total = repo.find_page(RepositoryFilters(filters={"unassigned": True}))
    client = repo.find_by_id(123)
"""

from .base import BaseRepository, RepositoryFilters
from .user import UserRepository, get_user_repository
from .trainer import TrainerRepository, get_trainer_repository
from .client import ClientRepository, get_client_repository
from .feedback import FeedbackRepository, get_feedback_repository
from .progress import ProgressRepository, get_progress_repository
from .plan import (
    MealPlanRepository,
    WorkoutPlanRepository,
    get_meal_plan_repository,
    get_workout_plan_repository,
)
from .scheduling import (
    AppointmentRepository,
    ConsultationRepository,
    get_appointment_repository,
    get_consultation_repository,
)
from .notification import NotificationRepository, get_notification_repository

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # Accounts
    "UserRepository",
    "get_user_repository",
    "TrainerRepository",
    "get_trainer_repository",
    "ClientRepository",
    "get_client_repository",
    # Tracking
    "FeedbackRepository",
    "get_feedback_repository",
    "ProgressRepository",
    "get_progress_repository",
    # Plans
    "MealPlanRepository",
    "WorkoutPlanRepository",
    "get_meal_plan_repository",
    "get_workout_plan_repository",
    # Scheduling
    "AppointmentRepository",
    "ConsultationRepository",
    "get_appointment_repository",
    "get_consultation_repository",
    # Notifications
    "NotificationRepository",
    "get_notification_repository",
]
