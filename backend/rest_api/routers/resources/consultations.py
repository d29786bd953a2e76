"""
Consultation endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import ConsultationService
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    AppointmentStatusType,
    ConsultationCreate,
    ConsultationOutput,
    ConsultationUpdate,
)


router = APIRouter(
    prefix="/api/consultations",
    tags=["consultations"],
    dependencies=[Depends(current_user_context)],
)


def consultation_filters(
    client_id: int | None = Query(default=None, alias="clientId"),
    trainer_id: int | None = Query(default=None, alias="trainerId"),
    consultation_status: AppointmentStatusType | None = Query(default=None, alias="status"),
) -> dict[str, Any]:
    return {"client_id": client_id, "trainer_id": trainer_id, "status": consultation_status}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=ConsultationService,
        create_schema=ConsultationCreate,
        update_schema=ConsultationUpdate,
        output_schema=ConsultationOutput,
        filters=consultation_filters,
    ),
)
