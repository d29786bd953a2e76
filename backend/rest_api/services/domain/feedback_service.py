"""
Feedback Service - trainer ratings.

Business rules:
- Rating is an integer in [1, 5]
- The rating user and the trainer must exist
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Feedback, Trainer, User
from rest_api.repositories import FeedbackRepository
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import Limits
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import FeedbackOutput


class FeedbackService(BaseCRUDService[Feedback, FeedbackOutput]):
    """Service for trainer feedback."""

    non_nullable_fields = ("rating",)

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Feedback,
            repository=FeedbackRepository(db),
            output_schema=FeedbackOutput,
            entity_name="Feedback",
        )

    def _validate_create(self, data: dict[str, Any]) -> None:
        if self._db.get(User, data["user_id"]) is None:
            raise NotFoundError("User", data["user_id"])
        if self._db.get(Trainer, data["trainer_id"]) is None:
            raise NotFoundError("Trainer", data["trainer_id"])
        self._check_rating(data.get("rating"))

    def _validate_update(self, entity: Feedback, data: dict[str, Any]) -> None:
        self._check_rating(data.get("rating"))

    @staticmethod
    def _check_rating(rating: Any) -> None:
        if rating is None:
            return
        if not isinstance(rating, int) or not Limits.RATING_MIN <= rating <= Limits.RATING_MAX:
            raise ValidationError(
                f"Rating must be between {Limits.RATING_MIN} and {Limits.RATING_MAX}",
                field="rating",
            )
