"""
Appointment endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import AppointmentService
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    AppointmentCreate,
    AppointmentKind,
    AppointmentOutput,
    AppointmentStatusType,
    AppointmentUpdate,
)


router = APIRouter(
    prefix="/api/appointments",
    tags=["appointments"],
    dependencies=[Depends(current_user_context)],
)


def appointment_filters(
    client_id: int | None = Query(default=None, alias="clientId"),
    trainer_id: int | None = Query(default=None, alias="trainerId"),
    appointment_status: AppointmentStatusType | None = Query(default=None, alias="status"),
    appointment_type: AppointmentKind | None = Query(default=None, alias="type"),
) -> dict[str, Any]:
    return {
        "client_id": client_id,
        "trainer_id": trainer_id,
        "status": appointment_status,
        "type": appointment_type,
    }


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=AppointmentService,
        create_schema=AppointmentCreate,
        update_schema=AppointmentUpdate,
        output_schema=AppointmentOutput,
        filters=appointment_filters,
    ),
)
