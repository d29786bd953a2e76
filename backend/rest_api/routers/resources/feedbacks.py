"""
Feedback endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import FeedbackService
from shared.config.constants import Limits
from shared.security.auth import current_user_context
from shared.utils.schemas import FeedbackCreate, FeedbackOutput, FeedbackUpdate


router = APIRouter(
    prefix="/api/feedbacks",
    tags=["feedbacks"],
    dependencies=[Depends(current_user_context)],
)


def feedback_filters(
    trainer_id: int | None = Query(default=None, alias="trainerId"),
    user_id: int | None = Query(default=None, alias="userId"),
    rating: int | None = Query(default=None, ge=Limits.RATING_MIN, le=Limits.RATING_MAX),
) -> dict[str, Any]:
    return {"trainer_id": trainer_id, "user_id": user_id, "rating": rating}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=FeedbackService,
        create_schema=FeedbackCreate,
        update_schema=FeedbackUpdate,
        output_schema=FeedbackOutput,
        filters=feedback_filters,
    ),
)
