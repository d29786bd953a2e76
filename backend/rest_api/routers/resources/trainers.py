"""
Trainer endpoints: CRUD plus profile, client list, schedule and metrics.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import TrainerService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    ClientOutput,
    DataResponse,
    TrainerCreate,
    TrainerOutput,
    TrainerUpdate,
    UTCDatetime,
)


router = APIRouter(
    prefix="/api/trainers",
    tags=["trainers"],
    dependencies=[Depends(current_user_context)],
)


def trainer_filters(
    specialty: str | None = Query(default=None),
    user_id: int | None = Query(default=None, alias="userId"),
) -> dict[str, Any]:
    return {"specialty": specialty, "user_id": user_id}


@router.get("/user/{user_id}", response_model=DataResponse[TrainerOutput])
def get_trainer_by_user(user_id: int, db: Session = Depends(get_db)) -> dict:
    """Trainer profile of a user."""
    return {"data": TrainerService(db).get_by_user_id(user_id)}


@router.get("/{trainer_id}/complete")
def get_trainer_complete(trainer_id: int, db: Session = Depends(get_db)) -> dict:
    """Trainer with clients, appointments, feedbacks and summary stats."""
    return {"data": TrainerService(db).get_complete_profile(trainer_id)}


@router.get("/{trainer_id}/clients", response_model=DataResponse[list[ClientOutput]])
def get_trainer_clients(trainer_id: int, db: Session = Depends(get_db)) -> dict:
    """Assigned clients with their latest progress."""
    return {"data": TrainerService(db).get_clients(trainer_id)}


@router.get("/{trainer_id}/schedule")
def get_trainer_schedule(
    trainer_id: int,
    start_date: UTCDatetime | None = Query(default=None, alias="startDate"),
    end_date: UTCDatetime | None = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
) -> dict:
    """Appointments in ascending time order with a summary."""
    return {"data": TrainerService(db).get_schedule(trainer_id, start_date, end_date)}


@router.get("/{trainer_id}/metrics")
def get_trainer_metrics(trainer_id: int, db: Session = Depends(get_db)) -> dict:
    """Rating, appointment completion rate and active clients."""
    return {"data": TrainerService(db).get_metrics(trainer_id)}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=TrainerService,
        create_schema=TrainerCreate,
        update_schema=TrainerUpdate,
        output_schema=TrainerOutput,
        filters=trainer_filters,
    ),
)
