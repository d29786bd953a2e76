"""
User Service - account lifecycle.

Business rules:
- Email and firebaseUid are unique
- firebaseUid is fixed after creation
- Deleting a user removes its profiles, plans and notifications
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import UserRepository
from rest_api.services.base_service import BaseCRUDService
from shared.config.logging import get_logger, mask_email, mask_uid
from shared.utils.exceptions import AppException, ConflictError, ImmutableFieldError, NotFoundError
from shared.utils.schemas import UserOutput

logger = get_logger(__name__)

DUPLICATE_USER_MESSAGE = "Email or Firebase UID already exists"


class UserService(BaseCRUDService[User, UserOutput]):
    """Service for user accounts."""

    non_nullable_fields = ("name", "email", "role")

    def __init__(self, db: Session):
        self._users = UserRepository(db)
        super().__init__(
            db=db,
            model=User,
            repository=self._users,
            output_schema=UserOutput,
            entity_name="User",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_firebase_uid(self, firebase_uid: str) -> UserOutput:
        user = self._users.find_by_firebase_uid(firebase_uid)
        if user is None:
            raise NotFoundError("User", lookup="firebase_uid", uid=mask_uid(firebase_uid))
        return self.to_output(user)

    def get_by_email(self, email: str) -> UserOutput:
        user = self._users.find_by_email(email)
        if user is None:
            raise NotFoundError("User", lookup="email", email=mask_email(email))
        return self.to_output(user)

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        if self._users.find_by_email(data["email"]) or self._users.find_by_firebase_uid(
            data["firebase_uid"]
        ):
            raise ConflictError(DUPLICATE_USER_MESSAGE, email=mask_email(data["email"]))

    def _validate_update(self, entity: User, data: dict[str, Any]) -> None:
        if "firebase_uid" in data:
            if data["firebase_uid"] != entity.firebase_uid:
                raise ImmutableFieldError("User", "firebaseUid", user_id=entity.id)
            data.pop("firebase_uid")

        new_email = data.get("email")
        if new_email and new_email != entity.email:
            existing = self._users.find_by_email(new_email)
            if existing is not None and existing.id != entity.id:
                raise ConflictError(DUPLICATE_USER_MESSAGE, email=mask_email(new_email))

    def _integrity_error(self, error: IntegrityError) -> AppException:
        return ConflictError(DUPLICATE_USER_MESSAGE)

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _after_create(self, entity: User) -> None:
        logger.info(
            "User registered",
            user_id=entity.id,
            role=entity.role,
            email=mask_email(entity.email),
        )
