"""
User Repository - Data access for user accounts.
"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select

from rest_api.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User entities.

    Guarantees eager loading of:
    - trainer_profile
    - client_profile
    """

    search_columns = ("name", "email")
    sort_fields = {"name": "name", "email": "email", "role": "role"}
    filter_columns = {"role": "role"}

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User).options(
            selectinload(User.trainer_profile),
            selectinload(User.client_profile),
        )

    def find_by_firebase_uid(self, firebase_uid: str) -> User | None:
        return self.find_one_by(firebase_uid=firebase_uid)

    def find_by_email(self, email: str) -> User | None:
        return self.find_one_by(email=email)

    def find_by_role(self, role: str | None) -> list[User]:
        """All users, or only those with ``role`` when given."""
        query = select(User).order_by(User.id)
        if role:
            query = query.where(User.role == role)
        return list(self._db.execute(query).scalars().all())


def get_user_repository(db: Session) -> UserRepository:
    """Factory function for UserRepository."""
    return UserRepository(db)
