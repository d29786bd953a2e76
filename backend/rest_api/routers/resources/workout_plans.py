"""
Workout plan endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import WorkoutPlanService
from shared.security.auth import current_user_context
from shared.utils.schemas import WorkoutPlanCreate, WorkoutPlanOutput, WorkoutPlanUpdate


router = APIRouter(
    prefix="/api/workout-plans",
    tags=["workout-plans"],
    dependencies=[Depends(current_user_context)],
)


def workout_plan_filters(
    user_id: int | None = Query(default=None, alias="userId"),
    category: str | None = Query(default=None),
    difficulty: str | None = Query(default=None),
    is_active: bool | None = Query(default=None, alias="isActive"),
) -> dict[str, Any]:
    return {
        "user_id": user_id,
        "category": category,
        "difficulty": difficulty,
        "is_active": is_active,
    }


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=WorkoutPlanService,
        create_schema=WorkoutPlanCreate,
        update_schema=WorkoutPlanUpdate,
        output_schema=WorkoutPlanOutput,
        filters=workout_plan_filters,
    ),
)
