"""
Progress endpoints: CRUD plus per-client history, trends and summary.
"""

from typing import Any, Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import ProgressService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import DataResponse, ProgressCreate, ProgressOutput, ProgressUpdate


router = APIRouter(
    prefix="/api/progress",
    tags=["progress"],
    dependencies=[Depends(current_user_context)],
)


def progress_filters(
    client_id: int | None = Query(default=None, alias="clientId"),
) -> dict[str, Any]:
    return {"client_id": client_id}


@router.get("/client/{client_id}", response_model=DataResponse[list[ProgressOutput]])
def get_progress_by_client(
    client_id: int,
    limit: int = Query(default=30, ge=1, le=1000),
    order_by: Literal["asc", "desc"] = Query(default="desc", alias="orderBy"),
    db: Session = Depends(get_db),
) -> dict:
    """Progress history of a client ordered by date."""
    return {"data": ProgressService(db).list_for_client(client_id, limit, order_by)}


@router.get("/client/{client_id}/trends")
def get_progress_trends(
    client_id: int,
    period: int = Query(default=30, ge=1, le=3650, description="Days to look back"),
    db: Session = Depends(get_db),
) -> dict:
    """Weight and BMI change within the period with daily data points."""
    return {"data": ProgressService(db).get_trends(client_id, period)}


@router.get("/client/{client_id}/summary")
def get_progress_summary(client_id: int, db: Session = Depends(get_db)) -> dict:
    """Current vs starting measurement, averages, range and tracking period."""
    return {"data": ProgressService(db).get_summary(client_id)}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=ProgressService,
        create_schema=ProgressCreate,
        update_schema=ProgressUpdate,
        output_schema=ProgressOutput,
        filters=progress_filters,
    ),
)
