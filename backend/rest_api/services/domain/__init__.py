"""
Domain Services - Application Layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import ClientService

    # In router
    service = ClientService(db)
    profile = service.get_complete_profile(client_id)
"""

from .user_service import UserService
from .trainer_service import TrainerService
from .client_service import ClientService
from .feedback_service import FeedbackService
from .progress_service import ProgressService
from .plan_service import MealPlanService, WorkoutPlanService
from .scheduling_service import AppointmentService, ConsultationService
from .notification_service import NotificationService
from .analytics_service import AnalyticsService

__all__ = [
    # Accounts
    "UserService",
    "TrainerService",
    "ClientService",
    # Tracking
    "FeedbackService",
    "ProgressService",
    # Plans
    "MealPlanService",
    "WorkoutPlanService",
    # Scheduling
    "AppointmentService",
    "ConsultationService",
    # Notifications
    "NotificationService",
    # Reporting
    "AnalyticsService",
]
