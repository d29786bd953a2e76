"""
Plan Services - meal plans (with their meals) and workout plans.

Business rules:
- Plans belong to a user
- startDate must not be after endDate
- Sending ``meals`` on a meal plan update replaces the whole set
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Meal, MealPlan, User, WorkoutPlan
from rest_api.repositories import MealPlanRepository, WorkoutPlanRepository
from rest_api.services.base_service import BaseCRUDService
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import MealOutput, MealPlanOutput, WorkoutPlanOutput
from shared.utils.validators import validate_image_url


def _check_date_range(entity: MealPlan | WorkoutPlan | None, data: dict[str, Any]) -> None:
    """Validate the date range after merging the update into current values."""
    start = data.get("start_date", entity.start_date if entity else None)
    end = data.get("end_date", entity.end_date if entity else None)
    if start and end and start > end:
        raise ValidationError("startDate must be on or before endDate", field="start_date")


def _check_owner(db: Session, user_id: int) -> None:
    if db.get(User, user_id) is None:
        raise NotFoundError("User", user_id)


class MealPlanService(BaseCRUDService[MealPlan, MealPlanOutput]):
    """Service for meal plans and their meals."""

    non_nullable_fields = (
        "title",
        "category",
        "calories",
        "protein",
        "fat",
        "carbs",
        "is_active",
    )

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MealPlan,
            repository=MealPlanRepository(db),
            output_schema=MealPlanOutput,
            entity_name="Meal plan",
            image_url_fields={"image_url"},
        )

    def get_meals(self, plan_id: int) -> list[MealOutput]:
        plan = self.get_entity_or_404(plan_id)
        return [MealOutput.model_validate(m) for m in plan.meals]

    # =========================================================================
    # Transformation
    # =========================================================================

    def _build_meals(self, meals: list[dict[str, Any]]) -> list[Meal]:
        built = []
        for meal in meals:
            meal = dict(meal)
            if meal.get("image_url"):
                try:
                    meal["image_url"] = validate_image_url(meal["image_url"])
                except ValueError as e:
                    raise ValidationError(str(e), field="meals.image_url")
            built.append(Meal(**meal))
        return built

    def _build_entity(self, data: dict[str, Any]) -> MealPlan:
        meals = data.pop("meals", None) or []
        plan = MealPlan(**data)
        plan.meals = self._build_meals(meals)
        return plan

    def _apply_changes(self, entity: MealPlan, data: dict[str, Any]) -> dict[str, Any]:
        meals = data.pop("meals", None)
        old_values = super()._apply_changes(entity, data)
        if meals is not None:
            # delete-orphan cascade removes the previous meals
            entity.meals = self._build_meals(meals)
        return old_values

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        _check_owner(self._db, data["user_id"])
        _check_date_range(None, data)

    def _validate_update(self, entity: MealPlan, data: dict[str, Any]) -> None:
        _check_date_range(entity, data)


class WorkoutPlanService(BaseCRUDService[WorkoutPlan, WorkoutPlanOutput]):
    """Service for workout plans."""

    non_nullable_fields = ("title", "category", "duration", "difficulty", "is_active")

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=WorkoutPlan,
            repository=WorkoutPlanRepository(db),
            output_schema=WorkoutPlanOutput,
            entity_name="Workout plan",
            image_url_fields={"image_url"},
        )

    def _validate_create(self, data: dict[str, Any]) -> None:
        _check_owner(self._db, data["user_id"])
        _check_date_range(None, data)

    def _validate_update(self, entity: WorkoutPlan, data: dict[str, Any]) -> None:
        _check_date_range(entity, data)
