"""
Meal plan endpoints. Meals are nested in create/update payloads.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import MealPlanService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    DataResponse,
    MealOutput,
    MealPlanCreate,
    MealPlanOutput,
    MealPlanUpdate,
)


router = APIRouter(
    prefix="/api/meal-plans",
    tags=["meal-plans"],
    dependencies=[Depends(current_user_context)],
)


def meal_plan_filters(
    user_id: int | None = Query(default=None, alias="userId"),
    category: str | None = Query(default=None),
    is_active: bool | None = Query(default=None, alias="isActive"),
) -> dict[str, Any]:
    return {"user_id": user_id, "category": category, "is_active": is_active}


@router.get("/{plan_id}/meals", response_model=DataResponse[list[MealOutput]])
def get_meal_plan_meals(plan_id: int, db: Session = Depends(get_db)) -> dict:
    return {"data": MealPlanService(db).get_meals(plan_id)}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=MealPlanService,
        create_schema=MealPlanCreate,
        update_schema=MealPlanUpdate,
        output_schema=MealPlanOutput,
        filters=meal_plan_filters,
    ),
)
