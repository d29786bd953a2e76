"""
Pydantic schemas shared by the REST API and its tests.

All payloads use camelCase on the wire (``trainerId``, ``createdAt``) and
accept snake_case on input as well.
"""

from datetime import date, datetime, timezone
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from shared.config.constants import Defaults, Limits


def _to_naive_utc(value: datetime) -> datetime:
    """Store every timestamp as naive UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UTCDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["CLIENT", "TRAINER", "ADMIN"]
AppointmentStatusType = Literal["PENDING", "CONFIRMED", "COMPLETED", "CANCELLED"]
AppointmentKind = Literal["IN_PERSON", "VIDEO_CALL", "PHONE_CALL", "CHAT"]
NotificationStatusType = Literal["UNREAD", "READ"]
Rating = Annotated[int, Field(ge=Limits.RATING_MIN, le=Limits.RATING_MAX)]
NonNegative = Annotated[float, Field(ge=0)]


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, snake_case accepted, ORM-readable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _counts_field() -> Any:
    return Field(
        default_factory=dict,
        validation_alias=AliasChoices("counts", "_count"),
        serialization_alias="_count",
    )


# =============================================================================
# Response Envelopes
# =============================================================================

T = TypeVar("T")


class PageInfo(CamelModel):
    """Pagination metadata returned with every list."""

    page: int
    limit: int
    total: int
    total_pages: int


class ListResponse(CamelModel, Generic[T]):
    data: list[T]
    pagination: PageInfo


class DataResponse(CamelModel, Generic[T]):
    data: T


class MessageResponse(CamelModel, Generic[T]):
    """Create/update response: the entity plus a human-readable message."""

    data: T
    message: str


class BulkDeleteRequest(CamelModel):
    ids: list[int] = Field(min_length=1, max_length=Limits.MAX_BULK_IDS)


class BulkDeleteResponse(CamelModel):
    success: bool
    deleted: int
    message: str


class BulkUpdateRequest(CamelModel):
    ids: list[int] = Field(min_length=1, max_length=Limits.MAX_BULK_IDS)
    data: dict[str, Any]


class BulkUpdateResponse(CamelModel, Generic[T]):
    data: list[T]
    updated: int


class CountResponse(CamelModel):
    count: int


# =============================================================================
# Nested Summaries
# =============================================================================


class UserSummary(CamelModel):
    id: int
    name: str
    email: str
    role: str


class TrainerSummary(CamelModel):
    id: int
    user_id: int
    specialty: str | None = None
    user: UserSummary | None = None


class ClientSummary(CamelModel):
    id: int
    user_id: int
    trainer_id: int | None = None
    user: UserSummary | None = None


class ProgressSnapshot(CamelModel):
    """Latest measurement shown next to a client."""

    id: int
    weight: float
    height: float | None = None
    bmi: float | None = None
    body_fat: float | None = None
    progress_date: datetime


# =============================================================================
# Users
# =============================================================================


class UserCreate(CamelModel):
    email: EmailStr
    name: str = Field(min_length=Limits.USER_NAME_MIN, max_length=Limits.USER_NAME_MAX)
    role: Role = "CLIENT"
    firebase_uid: str = Field(min_length=1, max_length=128)
    phone: str | None = Field(default=None, max_length=50)
    bio: str | None = None
    device_token: str | None = None


class UserUpdate(CamelModel):
    email: EmailStr | None = None
    name: str | None = Field(
        default=None, min_length=Limits.USER_NAME_MIN, max_length=Limits.USER_NAME_MAX
    )
    role: Role | None = None
    # Accepted only so that a change can be rejected explicitly
    firebase_uid: str | None = None
    phone: str | None = Field(default=None, max_length=50)
    bio: str | None = None
    device_token: str | None = None


class UserOutput(CamelModel):
    id: int
    email: str
    name: str
    role: str
    firebase_uid: str
    phone: str | None = None
    bio: str | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Trainers
# =============================================================================


class TrainerCreate(CamelModel):
    user_id: int
    specialty: str | None = Field(default=None, max_length=255)
    experience_years: int | None = Field(default=None, ge=0)
    bio: str | None = None


class TrainerUpdate(CamelModel):
    specialty: str | None = Field(default=None, max_length=255)
    experience_years: int | None = Field(default=None, ge=0)
    bio: str | None = None


class TrainerOutput(CamelModel):
    id: int
    user_id: int
    specialty: str | None = None
    experience_years: int | None = None
    bio: str | None = None
    average_rating: float = 0.0
    user: UserSummary | None = None
    counts: dict[str, int] = _counts_field()
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Clients
# =============================================================================


class ClientCreate(CamelModel):
    user_id: int
    trainer_id: int | None = None
    goals: str | None = Field(default=None, max_length=Limits.GOALS_MAX)
    activity_level: str | None = Field(default=None, max_length=50)
    dietary_preferences: str | None = None
    weight: NonNegative | None = None
    height: NonNegative | None = None
    bmi: NonNegative | None = None


class ClientUpdate(CamelModel):
    trainer_id: int | None = None
    goals: str | None = Field(default=None, max_length=Limits.GOALS_MAX)
    activity_level: str | None = Field(default=None, max_length=50)
    dietary_preferences: str | None = None
    weight: NonNegative | None = None
    height: NonNegative | None = None
    bmi: NonNegative | None = None


class ClientOutput(CamelModel):
    id: int
    user_id: int
    trainer_id: int | None = None
    goals: str | None = None
    activity_level: str | None = None
    dietary_preferences: str | None = None
    weight: float | None = None
    height: float | None = None
    bmi: float | None = None
    user: UserSummary | None = None
    trainer: TrainerSummary | None = None
    latest_progress: ProgressSnapshot | None = None
    counts: dict[str, int] = _counts_field()
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Feedback
# =============================================================================


class FeedbackCreate(CamelModel):
    user_id: int
    trainer_id: int
    rating: Rating
    comments: str | None = None


class FeedbackUpdate(CamelModel):
    rating: Rating | None = None
    comments: str | None = None


class FeedbackOutput(CamelModel):
    id: int
    user_id: int
    trainer_id: int
    rating: int
    comments: str | None = None
    user: UserSummary | None = None
    trainer: TrainerSummary | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Progress
# =============================================================================


class ProgressCreate(CamelModel):
    client_id: int
    weight: NonNegative
    height: NonNegative | None = None
    bmi: NonNegative | None = None
    body_fat: NonNegative | None = None
    muscle_mass: NonNegative | None = None
    notes: str | None = None
    progress_date: UTCDatetime | None = None


class ProgressUpdate(CamelModel):
    weight: NonNegative | None = None
    height: NonNegative | None = None
    bmi: NonNegative | None = None
    body_fat: NonNegative | None = None
    muscle_mass: NonNegative | None = None
    notes: str | None = None
    progress_date: UTCDatetime | None = None


class ProgressOutput(CamelModel):
    id: int
    client_id: int
    weight: float
    height: float | None = None
    bmi: float | None = None
    body_fat: float | None = None
    muscle_mass: float | None = None
    notes: str | None = None
    progress_date: datetime
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Meal Plans
# =============================================================================


class _DateRangeMixin(CamelModel):
    @model_validator(mode="after")
    def _check_date_range(self):
        start = getattr(self, "start_date", None)
        end = getattr(self, "end_date", None)
        if start and end and start > end:
            raise ValueError("startDate must be on or before endDate")
        return self


class MealCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    type: str = Defaults.MEAL_TYPE
    ingredients: list[str] = Field(default_factory=list)
    calories: NonNegative = 0
    protein: NonNegative = 0
    image_url: str | None = None


class MealOutput(CamelModel):
    id: int
    meal_plan_id: int
    name: str
    description: str | None = None
    type: str
    ingredients: list[str] = Field(default_factory=list)
    calories: float
    protein: float
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime


class MealPlanCreate(_DateRangeMixin):
    user_id: int
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str = Defaults.MEAL_PLAN_CATEGORY
    image_url: str | None = None
    calories: NonNegative = 0
    protein: NonNegative = 0
    fat: NonNegative = 0
    carbs: NonNegative = 0
    is_active: bool = True
    start_date: date | None = None
    end_date: date | None = None
    meals: list[MealCreate] = Field(default_factory=list)


class MealPlanUpdate(_DateRangeMixin):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None
    image_url: str | None = None
    calories: NonNegative | None = None
    protein: NonNegative | None = None
    fat: NonNegative | None = None
    carbs: NonNegative | None = None
    is_active: bool | None = None
    start_date: date | None = None
    end_date: date | None = None
    meals: list[MealCreate] | None = None


class MealPlanOutput(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    category: str
    image_url: str | None = None
    calories: float
    protein: float
    fat: float
    carbs: float
    is_active: bool
    start_date: date | None = None
    end_date: date | None = None
    meals: list[MealOutput] = Field(default_factory=list)
    user: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Workout Plans
# =============================================================================


class WorkoutPlanCreate(_DateRangeMixin):
    user_id: int
    # Older dashboard builds send the plan title as "name"
    title: str = Field(
        min_length=1, max_length=255, validation_alias=AliasChoices("title", "name")
    )
    description: str | None = None
    category: str = Defaults.WORKOUT_CATEGORY
    duration: int = Field(default=Defaults.WORKOUT_DURATION, ge=1)
    difficulty: str = Defaults.WORKOUT_DIFFICULTY
    exercises: str | None = None
    sets: int | None = Field(default=None, ge=0)
    reps: int | None = Field(default=None, ge=0)
    image_url: str | None = None
    is_active: bool = True
    start_date: date | None = None
    end_date: date | None = None


class WorkoutPlanUpdate(_DateRangeMixin):
    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("title", "name"),
    )
    description: str | None = None
    category: str | None = None
    duration: int | None = Field(default=None, ge=1)
    difficulty: str | None = None
    exercises: str | None = None
    sets: int | None = Field(default=None, ge=0)
    reps: int | None = Field(default=None, ge=0)
    image_url: str | None = None
    is_active: bool | None = None
    start_date: date | None = None
    end_date: date | None = None


class WorkoutPlanOutput(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    category: str
    duration: int
    difficulty: str
    exercises: str | None = None
    sets: int | None = None
    reps: int | None = None
    image_url: str | None = None
    is_active: bool
    start_date: date | None = None
    end_date: date | None = None
    user: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Appointments and Consultations
# =============================================================================


class AppointmentCreate(CamelModel):
    client_id: int
    trainer_id: int
    appointment_time: UTCDatetime
    status: AppointmentStatusType = "PENDING"
    type: AppointmentKind = "IN_PERSON"
    duration: int = Field(default=Defaults.APPOINTMENT_DURATION, ge=1)
    meeting_link: str | None = None
    notes: str | None = None


class AppointmentUpdate(CamelModel):
    appointment_time: UTCDatetime | None = None
    status: AppointmentStatusType | None = None
    type: AppointmentKind | None = None
    duration: int | None = Field(default=None, ge=1)
    meeting_link: str | None = None
    notes: str | None = None


class AppointmentOutput(CamelModel):
    id: int
    client_id: int
    trainer_id: int
    appointment_time: datetime
    status: str
    type: str
    duration: int
    meeting_link: str | None = None
    notes: str | None = None
    client: ClientSummary | None = None
    trainer: TrainerSummary | None = None
    created_at: datetime
    updated_at: datetime


class ConsultationCreate(CamelModel):
    client_id: int
    trainer_id: int
    scheduled_at: UTCDatetime
    status: AppointmentStatusType = "PENDING"
    notes: str | None = None


class ConsultationUpdate(CamelModel):
    scheduled_at: UTCDatetime | None = None
    status: AppointmentStatusType | None = None
    notes: str | None = None


class ConsultationOutput(CamelModel):
    id: int
    client_id: int
    trainer_id: int
    scheduled_at: datetime
    status: str
    notes: str | None = None
    client: ClientSummary | None = None
    trainer: TrainerSummary | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Notifications
# =============================================================================


class NotificationCreate(CamelModel):
    user_id: int
    message: str = Field(min_length=1)
    notification_type: str = Field(default="GENERAL", max_length=50)
    status: NotificationStatusType = "UNREAD"


class NotificationUpdate(CamelModel):
    message: str | None = Field(default=None, min_length=1)
    notification_type: str | None = Field(default=None, max_length=50)
    status: NotificationStatusType | None = None


class NotificationOutput(CamelModel):
    id: int
    user_id: int
    message: str
    notification_type: str
    status: str
    created_at: datetime
    updated_at: datetime


class DeviceRegisterRequest(CamelModel):
    user_id: int
    device_token: str = Field(min_length=1)


class SendNotificationRequest(CamelModel):
    user_id: int
    message: str = Field(min_length=1)
    notification_type: str = Field(default="GENERAL", max_length=50)


class BulkNotificationRequest(CamelModel):
    user_ids: list[int] = Field(min_length=1, max_length=Limits.MAX_BULK_IDS)
    message: str = Field(min_length=1)
    notification_type: str = Field(default="GENERAL", max_length=50)


class BroadcastNotificationRequest(CamelModel):
    role: Role | None = None
    message: str = Field(min_length=1)
    notification_type: str = Field(default="GENERAL", max_length=50)


class CreatedResponse(CamelModel):
    created: int
