"""
User endpoints.

Registration (POST /api/users) is open and rate limited; every other route
requires a bearer token.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from rest_api.routers._common import CRUDRouteConfig, register_crud_routes
from rest_api.services.domain import UserService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.security.rate_limit import limiter, REGISTRATION_LIMIT
from shared.utils.schemas import (
    DataResponse,
    MessageResponse,
    Role,
    UserCreate,
    UserOutput,
    UserUpdate,
)


registration_router = APIRouter(prefix="/api/users", tags=["users"])

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    dependencies=[Depends(current_user_context)],
)


def user_filters(
    role: Role | None = Query(default=None, description="Filter by role"),
) -> dict[str, Any]:
    return {"role": role}


@registration_router.post(
    "",
    response_model=MessageResponse[UserOutput],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(REGISTRATION_LIMIT)
def register_user(
    request: Request,
    body: UserCreate,
    db: Session = Depends(get_db),
) -> dict:
    """Create a user account. Open for sign-up."""
    user = UserService(db).create(body.model_dump())
    return {"data": user, "message": "User created successfully"}


@router.get("/me", response_model=DataResponse[UserOutput])
def get_current_user(
    db: Session = Depends(get_db),
    ctx: dict = Depends(current_user_context),
) -> dict:
    """The user whose firebaseUid matches the token subject."""
    return {"data": UserService(db).get_by_firebase_uid(ctx["uid"])}


@router.get("/firebase/{firebase_uid}", response_model=DataResponse[UserOutput])
def get_user_by_firebase_uid(firebase_uid: str, db: Session = Depends(get_db)) -> dict:
    return {"data": UserService(db).get_by_firebase_uid(firebase_uid)}


@router.get("/email/{email}", response_model=DataResponse[UserOutput])
def get_user_by_email(email: str, db: Session = Depends(get_db)) -> dict:
    return {"data": UserService(db).get_by_email(email)}


register_crud_routes(
    router,
    CRUDRouteConfig(
        service=UserService,
        create_schema=UserCreate,
        update_schema=UserUpdate,
        output_schema=UserOutput,
        filters=user_filters,
        exclude=frozenset({"create"}),
    ),
)
