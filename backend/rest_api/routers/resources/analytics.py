"""
Analytics endpoints for the admin dashboard.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.services.domain import AnalyticsService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context


router = APIRouter(
    prefix="/api/analytics",
    tags=["analytics"],
    dependencies=[Depends(current_user_context)],
)


@router.get("/dashboard")
def get_dashboard_overview(db: Session = Depends(get_db)) -> dict:
    """Headline totals for the dashboard landing page."""
    return {"data": AnalyticsService(db).dashboard()}


@router.get("/users")
def get_user_analytics(db: Session = Depends(get_db)) -> dict:
    return {"data": AnalyticsService(db).users()}


@router.get("/users/growth")
def get_user_growth(
    days: int = Query(default=30, ge=1, le=365),
    db: Session = Depends(get_db),
) -> dict:
    """Daily registrations."""
    return {"data": AnalyticsService(db).user_growth(days)}


@router.get("/trainers")
def get_trainer_analytics(db: Session = Depends(get_db)) -> dict:
    return {"data": AnalyticsService(db).trainers()}


@router.get("/clients")
def get_client_analytics(db: Session = Depends(get_db)) -> dict:
    return {"data": AnalyticsService(db).clients()}


@router.get("/appointments")
def get_appointment_analytics(db: Session = Depends(get_db)) -> dict:
    return {"data": AnalyticsService(db).appointments()}


@router.get("/appointments/trends")
def get_appointment_trends(
    days: int = Query(default=30, ge=1, le=365),
    db: Session = Depends(get_db),
) -> dict:
    """Daily appointment counts by status."""
    return {"data": AnalyticsService(db).appointment_trends(days)}


@router.get("/system/health")
def get_system_health(db: Session = Depends(get_db)) -> dict:
    """Table counts and database status."""
    return {"data": AnalyticsService(db).system_health()}
