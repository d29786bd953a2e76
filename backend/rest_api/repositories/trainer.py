"""
Trainer Repository - Data access for trainer profiles.
"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select, or_, ColumnElement

from rest_api.models import Trainer, User
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository


class TrainerRepository(BaseRepository[Trainer]):
    """
    Repository for Trainer entities.

    Guarantees eager loading of:
    - user
    - clients, appointments, feedbacks (for counts and average rating)
    """

    sort_fields = {"specialty": "specialty", "experienceYears": "experience_years"}
    filter_columns = {"specialty": "specialty", "user_id": "user_id"}

    @property
    def model(self) -> type[Trainer]:
        return Trainer

    def _base_query(self) -> Select:
        return select(Trainer).options(
            selectinload(Trainer.user),
            selectinload(Trainer.clients),
            selectinload(Trainer.appointments),
            selectinload(Trainer.feedbacks),
        )

    def _search_clause(self, term: str) -> ColumnElement[bool]:
        """Match trainer name, email or specialty."""
        pattern = f"%{escape_like_pattern(term)}%"
        return or_(
            Trainer.specialty.ilike(pattern, escape="\\"),
            Trainer.user.has(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                )
            ),
        )

    def find_by_user_id(self, user_id: int) -> Trainer | None:
        return self.find_one_by(user_id=user_id)


def get_trainer_repository(db: Session) -> TrainerRepository:
    """Factory function for TrainerRepository."""
    return TrainerRepository(db)
