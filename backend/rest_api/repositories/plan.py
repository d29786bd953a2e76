"""
Plan Repositories - Data access for meal and workout plans.
"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select

from rest_api.models import MealPlan, WorkoutPlan
from .base import BaseRepository


class MealPlanRepository(BaseRepository[MealPlan]):
    """
    Repository for MealPlan entities.

    Guarantees eager loading of:
    - meals
    - user
    """

    search_columns = ("title", "description", "category")
    sort_fields = {
        "title": "title",
        "category": "category",
        "calories": "calories",
        "startDate": "start_date",
    }
    filter_columns = {"user_id": "user_id", "category": "category", "is_active": "is_active"}

    @property
    def model(self) -> type[MealPlan]:
        return MealPlan

    def _base_query(self) -> Select:
        return select(MealPlan).options(
            selectinload(MealPlan.meals),
            selectinload(MealPlan.user),
        )

    def find_by_user(self, user_id: int) -> list[MealPlan]:
        query = self._base_query().where(MealPlan.user_id == user_id).order_by(MealPlan.created_at.desc())
        return list(self._db.execute(query).scalars().unique().all())


class WorkoutPlanRepository(BaseRepository[WorkoutPlan]):
    """
    Repository for WorkoutPlan entities.

    Guarantees eager loading of:
    - user
    """

    search_columns = ("title", "description", "category")
    sort_fields = {
        "title": "title",
        "category": "category",
        "duration": "duration",
        "difficulty": "difficulty",
        "startDate": "start_date",
    }
    filter_columns = {
        "user_id": "user_id",
        "category": "category",
        "difficulty": "difficulty",
        "is_active": "is_active",
    }

    @property
    def model(self) -> type[WorkoutPlan]:
        return WorkoutPlan

    def _base_query(self) -> Select:
        return select(WorkoutPlan).options(selectinload(WorkoutPlan.user))

    def find_by_user(self, user_id: int) -> list[WorkoutPlan]:
        query = self._base_query().where(WorkoutPlan.user_id == user_id).order_by(WorkoutPlan.created_at.desc())
        return list(self._db.execute(query).scalars().unique().all())


def get_meal_plan_repository(db: Session) -> MealPlanRepository:
    """Factory function for MealPlanRepository."""
    return MealPlanRepository(db)


def get_workout_plan_repository(db: Session) -> WorkoutPlanRepository:
    """Factory function for WorkoutPlanRepository."""
    return WorkoutPlanRepository(db)
