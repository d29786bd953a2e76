"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, TimestampMixin and utcnow
- user: User
- trainer: Trainer
- client: Client
- plan: MealPlan, Meal, WorkoutPlan
- scheduling: Appointment, Consultation
- progress: ProgressRecord
- feedback: Feedback
- notification: Notification
"""

# Base classes
from .base import Base, TimestampMixin, utcnow

# Accounts and profiles
from .user import User
from .trainer import Trainer
from .client import Client

# Plans
from .plan import MealPlan, Meal, WorkoutPlan

# Scheduling
from .scheduling import Appointment, Consultation

# Tracking
from .progress import ProgressRecord, compute_bmi
from .feedback import Feedback
from .notification import Notification


__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "utcnow",
    # Accounts
    "User",
    "Trainer",
    "Client",
    # Plans
    "MealPlan",
    "Meal",
    "WorkoutPlan",
    # Scheduling
    "Appointment",
    "Consultation",
    # Tracking
    "ProgressRecord",
    "compute_bmi",
    "Feedback",
    "Notification",
]
