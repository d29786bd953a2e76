"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, AppointmentStatus

    if user.role == Roles.TRAINER:
        ...

    if appointment.status == AppointmentStatus.COMPLETED:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    CLIENT: Final[str] = "CLIENT"
    TRAINER: Final[str] = "TRAINER"
    ADMIN: Final[str] = "ADMIN"

    ALL: Final[list[str]] = [CLIENT, TRAINER, ADMIN]


# =============================================================================
# Entity Status Constants
# =============================================================================


class AppointmentStatus:
    """Appointment and consultation status constants."""

    PENDING: Final[str] = "PENDING"
    CONFIRMED: Final[str] = "CONFIRMED"
    COMPLETED: Final[str] = "COMPLETED"
    CANCELLED: Final[str] = "CANCELLED"

    ALL: Final[list[str]] = [PENDING, CONFIRMED, COMPLETED, CANCELLED]
    OPEN: Final[list[str]] = [PENDING, CONFIRMED]


class AppointmentType:
    """How a session with the trainer takes place."""

    IN_PERSON: Final[str] = "IN_PERSON"
    VIDEO_CALL: Final[str] = "VIDEO_CALL"
    PHONE_CALL: Final[str] = "PHONE_CALL"
    CHAT: Final[str] = "CHAT"

    ALL: Final[list[str]] = [IN_PERSON, VIDEO_CALL, PHONE_CALL, CHAT]


class NotificationStatus:
    """Notification read state."""

    UNREAD: Final[str] = "UNREAD"
    READ: Final[str] = "READ"

    ALL: Final[list[str]] = [UNREAD, READ]


class NotificationType:
    """Well-known notification types (the column is free text)."""

    GENERAL: Final[str] = "GENERAL"
    APPOINTMENT_REMINDER: Final[str] = "APPOINTMENT_REMINDER"
    PROGRESS_UPDATE: Final[str] = "PROGRESS_UPDATE"
    PLAN_ASSIGNED: Final[str] = "PLAN_ASSIGNED"


# =============================================================================
# Suggestion lists (shown in forms, not enforced)
# =============================================================================


class Suggestions:
    """Values offered by the dashboard forms."""

    SPECIALTIES: Final[list[str]] = [
        "Strength Training",
        "Cardio",
        "Yoga",
        "Pilates",
        "CrossFit",
        "Nutrition",
        "Weight Loss",
        "Rehabilitation",
    ]

    ACTIVITY_LEVELS: Final[list[str]] = [
        "Sedentary",
        "Lightly Active",
        "Moderately Active",
        "Very Active",
        "Extremely Active",
    ]

    MEAL_TYPES: Final[list[str]] = ["Breakfast", "Lunch", "Dinner", "Snack"]


# =============================================================================
# Defaults
# =============================================================================


class Defaults:
    """Column defaults shared by models and schemas."""

    MEAL_PLAN_CATEGORY: Final[str] = "General"
    MEAL_TYPE: Final[str] = "Breakfast"
    WORKOUT_CATEGORY: Final[str] = "Full Body"
    WORKOUT_DURATION: Final[int] = 30
    WORKOUT_DIFFICULTY: Final[str] = "Intermediate"
    APPOINTMENT_DURATION: Final[int] = 60


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Validation and pagination limits."""

    DEFAULT_PAGE_SIZE: Final[int] = 100
    MAX_PAGE_SIZE: Final[int] = 1000
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100
    MAX_BULK_IDS: Final[int] = 500

    USER_NAME_MIN: Final[int] = 3
    USER_NAME_MAX: Final[int] = 255
    GOALS_MAX: Final[int] = 1000

    RATING_MIN: Final[int] = 1
    RATING_MAX: Final[int] = 5

    RECENT_ACTIVITY_ITEMS: Final[int] = 5
    ACTIVE_WINDOW_DAYS: Final[int] = 30
    TOP_TRAINERS: Final[int] = 5
