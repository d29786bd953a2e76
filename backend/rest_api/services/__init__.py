"""
Services module for business logic.

- base_service: generic CRUD service with validation and lifecycle hooks
- domain/: one application service per resource - USE THESE

Usage:
    from rest_api.services.domain import TrainerService
    service = TrainerService(db)
    metrics = service.get_metrics(trainer_id)
"""

from .base_service import BaseCRUDService
from .domain import (
    UserService,
    TrainerService,
    ClientService,
    FeedbackService,
    ProgressService,
    MealPlanService,
    WorkoutPlanService,
    AppointmentService,
    ConsultationService,
    NotificationService,
    AnalyticsService,
)

__all__ = [
    # Base service class
    "BaseCRUDService",
    # Domain services
    "UserService",
    "TrainerService",
    "ClientService",
    "FeedbackService",
    "ProgressService",
    "MealPlanService",
    "WorkoutPlanService",
    "AppointmentService",
    "ConsultationService",
    "NotificationService",
    "AnalyticsService",
]
