"""
Client Repository - Data access for client profiles.
"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select, or_, ColumnElement

from rest_api.models import Client, Trainer, User
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository, RepositoryFilters


class ClientRepository(BaseRepository[Client]):
    """
    Repository for Client entities.

    Guarantees eager loading of:
    - user (with meal and workout plans for counts)
    - trainer with its user
    - progress_records (newest first)
    """

    sort_fields = {
        "activityLevel": "activity_level",
        "weight": "weight",
        "height": "height",
        "bmi": "bmi",
    }
    filter_columns = {
        "trainer_id": "trainer_id",
        "user_id": "user_id",
        "activity_level": "activity_level",
    }

    @property
    def model(self) -> type[Client]:
        return Client

    def _base_query(self) -> Select:
        return select(Client).options(
            selectinload(Client.user).selectinload(User.meal_plans),
            selectinload(Client.user).selectinload(User.workout_plans),
            selectinload(Client.trainer).selectinload(Trainer.user),
            selectinload(Client.progress_records),
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Equality filters plus the ``unassigned`` flag."""
        query = super()._apply_filters(query, filters)

        unassigned = filters.filters.get("unassigned")
        if unassigned is True:
            query = query.where(Client.trainer_id.is_(None))
        elif unassigned is False:
            query = query.where(Client.trainer_id.is_not(None))

        return query

    def _search_clause(self, term: str) -> ColumnElement[bool]:
        """Match the client's name, email or goals."""
        pattern = f"%{escape_like_pattern(term)}%"
        return or_(
            Client.goals.ilike(pattern, escape="\\"),
            Client.user.has(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                )
            ),
        )

    def find_by_user_id(self, user_id: int) -> Client | None:
        return self.find_one_by(user_id=user_id)

    def find_by_trainer(self, trainer_id: int) -> list[Client]:
        query = self._base_query().where(Client.trainer_id == trainer_id).order_by(Client.id)
        return list(self._db.execute(query).scalars().unique().all())


def get_client_repository(db: Session) -> ClientRepository:
    """Factory function for ClientRepository."""
    return ClientRepository(db)
