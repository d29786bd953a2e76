"""
Client endpoints: CRUD plus profile, plans, progress, activity feed and
appointments.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import ClientService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    AppointmentOutput,
    AppointmentStatusType,
    ClientCreate,
    ClientOutput,
    ClientUpdate,
    DataResponse,
)


router = APIRouter(
    prefix="/api/clients",
    tags=["clients"],
    dependencies=[Depends(current_user_context)],
)


def client_filters(
    trainer_id: int | None = Query(default=None, alias="trainerId"),
    user_id: int | None = Query(default=None, alias="userId"),
    activity_level: str | None = Query(default=None, alias="activityLevel"),
    unassigned: bool | None = Query(default=None, description="Only clients without trainer"),
) -> dict[str, Any]:
    return {
        "trainer_id": trainer_id,
        "user_id": user_id,
        "activity_level": activity_level,
        "unassigned": unassigned,
    }


@router.get("/user/{user_id}", response_model=DataResponse[ClientOutput])
def get_client_by_user(user_id: int, db: Session = Depends(get_db)) -> dict:
    """Client profile of a user."""
    return {"data": ClientService(db).get_by_user_id(user_id)}


@router.get("/{client_id}/complete")
def get_client_complete(client_id: int, db: Session = Depends(get_db)) -> dict:
    """Client with plans, recent progress and appointments plus stats."""
    return {"data": ClientService(db).get_complete_profile(client_id)}


@router.get("/{client_id}/plans")
def get_client_plans(client_id: int, db: Session = Depends(get_db)) -> dict:
    return {"data": ClientService(db).get_plans(client_id)}


@router.get("/{client_id}/progress")
def get_client_progress(
    client_id: int,
    limit: int = Query(default=30, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> dict:
    """Progress records (latest first) and weight/BMI trends."""
    return {"data": ClientService(db).get_progress(client_id, limit)}


@router.get("/{client_id}/activities")
def get_client_activities(client_id: int, db: Session = Depends(get_db)) -> dict:
    """Latest appointments, progress records and notifications."""
    return {"data": ClientService(db).get_activities(client_id)}


@router.get("/{client_id}/appointments", response_model=DataResponse[list[AppointmentOutput]])
def get_client_appointments(
    client_id: int,
    appointment_status: AppointmentStatusType | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
) -> dict:
    return {"data": ClientService(db).get_appointments(client_id, appointment_status)}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=ClientService,
        create_schema=ClientCreate,
        update_schema=ClientUpdate,
        output_schema=ClientOutput,
        filters=client_filters,
    ),
)
