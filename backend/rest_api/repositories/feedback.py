"""
Feedback Repository - Data access for trainer ratings.
"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select, or_, ColumnElement

from rest_api.models import Feedback, Trainer, User
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository


class FeedbackRepository(BaseRepository[Feedback]):
    """
    Repository for Feedback entities.

    Guarantees eager loading of:
    - user (the client who rated)
    - trainer with its user
    """

    sort_fields = {"rating": "rating"}
    filter_columns = {"trainer_id": "trainer_id", "user_id": "user_id", "rating": "rating"}

    @property
    def model(self) -> type[Feedback]:
        return Feedback

    def _base_query(self) -> Select:
        return select(Feedback).options(
            selectinload(Feedback.user),
            selectinload(Feedback.trainer).selectinload(Trainer.user),
        )

    def _search_clause(self, term: str) -> ColumnElement[bool]:
        """Match comments, the client's name or the trainer's name."""
        pattern = f"%{escape_like_pattern(term)}%"
        return or_(
            Feedback.comments.ilike(pattern, escape="\\"),
            Feedback.user.has(User.name.ilike(pattern, escape="\\")),
            Feedback.trainer.has(Trainer.user.has(User.name.ilike(pattern, escape="\\"))),
        )


def get_feedback_repository(db: Session) -> FeedbackRepository:
    """Factory function for FeedbackRepository."""
    return FeedbackRepository(db)
