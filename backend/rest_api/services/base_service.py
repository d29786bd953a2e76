"""
Base Service Classes for Clean Architecture.

Provides abstract base classes for application services that:
- Use Repository for data access (not direct queries)
- Use the output schema for DTO transformation
- Handle business logic and orchestration

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from rest_api.services.base_service import BaseCRUDService

    class TrainerService(BaseCRUDService[Trainer, TrainerOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=Trainer,
                repository=TrainerRepository(db),
                output_schema=TrainerOutput,
                entity_name="Trainer",
            )
"""

from __future__ import annotations

import math
from typing import Any, Generic, Sequence, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.repositories.base import BaseRepository, RepositoryFilters
from shared.infrastructure.db import safe_commit
from shared.config.logging import get_logger
from shared.utils.exceptions import AppException, NotFoundError, DatabaseError, ValidationError
from shared.utils.validators import validate_image_url

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseCRUDService(Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Provides standard CRUD methods that can be overridden for
    custom business logic. Uses Repository for all data access.

    Responsibilities:
    - Data access via Repository (not direct queries)
    - DTO transformation via output schema
    - Business rule validation through hooks
    - Hard deletes (no soft-delete flag)
    """

    # Columns that ignore an explicit null on update
    non_nullable_fields: tuple[str, ...] = ()

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        repository: BaseRepository[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        image_url_fields: set[str] | None = None,
    ):
        self._db = db
        self._model = model
        self._repo = repository
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._image_url_fields = image_url_fields or set()

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_page(self, filters: RepositoryFilters) -> tuple[list[OutputT], dict[str, int]]:
        """
        List one page of entities.

        Returns:
            (output DTOs, pagination dict with page, limit, total, total_pages)
        """
        entities, total = self._repo.find_page(filters)
        pagination = {
            "page": filters.page,
            "limit": filters.limit,
            "total": total,
            "total_pages": math.ceil(total / filters.limit) if total else 0,
        }
        return [self.to_output(e) for e in entities], pagination

    def get_by_id(self, entity_id: int) -> OutputT:
        """
        Get entity by ID.

        Raises:
            NotFoundError: If entity not found.
        """
        return self.to_output(self.get_entity_or_404(entity_id))

    def get_entity(self, entity_id: int) -> ModelT | None:
        """Get raw entity (for internal use)."""
        return self._repo.find_by_id(entity_id)

    def get_entity_or_404(self, entity_id: int) -> ModelT:
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any]) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError: If data is invalid.
            DatabaseError: If creation fails.
        """
        self._validate_create(data)
        data = self._validate_image_urls(data)

        entity = self._build_entity(data)
        self._db.add(entity)
        self._commit(f"create {self._entity_name.lower()}")

        self._after_create(entity)
        return self.get_by_id(entity.id)

    def update(self, entity_id: int, data: dict[str, Any]) -> OutputT:
        """
        Update existing entity with the fields present in ``data``.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If data is invalid.
            DatabaseError: If update fails.
        """
        entity = self.get_entity_or_404(entity_id)

        self._validate_update(entity, data)
        data = self._validate_image_urls(data)

        old_values = self._apply_changes(entity, data)
        self._commit(f"update {self._entity_name.lower()}")

        self._after_update(entity, old_values)
        return self.get_by_id(entity_id)

    def delete(self, entity_id: int) -> None:
        """
        Hard delete entity.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self.get_entity_or_404(entity_id)
        self._validate_delete(entity)

        entity_info = self._get_entity_info(entity)
        self._db.delete(entity)
        self._commit(f"delete {self._entity_name.lower()}")

        self._after_delete(entity_info)

    def bulk_delete(self, entity_ids: Sequence[int]) -> int:
        """
        Delete every existing entity in ``entity_ids``.
        Unknown IDs are ignored.

        Returns:
            Number of deleted entities.
        """
        entities = self._repo.find_by_ids(list(set(entity_ids)))
        for entity in entities:
            self._validate_delete(entity)
        for entity in entities:
            self._db.delete(entity)
        self._commit(f"delete {self._entity_name.lower()} records")

        logger.info(
            f"Bulk deleted {self._entity_name}",
            requested=len(entity_ids),
            deleted=len(entities),
        )
        return len(entities)

    def bulk_update(self, entity_ids: Sequence[int], data: dict[str, Any]) -> list[OutputT]:
        """
        Apply the same changes to every entity in ``entity_ids``.

        Raises:
            NotFoundError: If any ID does not exist (nothing is changed).
        """
        unique_ids = list(dict.fromkeys(entity_ids))
        entities = {e.id: e for e in self._repo.find_by_ids(unique_ids)}
        missing = [i for i in unique_ids if i not in entities]
        if missing:
            raise NotFoundError(self._entity_name, ", ".join(str(i) for i in missing))

        data = self._validate_image_urls(dict(data))
        for entity in entities.values():
            changes = dict(data)
            self._validate_update(entity, changes)
            self._apply_changes(entity, changes)
        self._commit(f"update {self._entity_name.lower()} records")

        return [self.get_by_id(i) for i in unique_ids]

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    def _build_entity(self, data: dict[str, Any]) -> ModelT:
        """Instantiate the model from create data. Override for nested rows."""
        return self._model(**data)

    def _apply_changes(self, entity: ModelT, data: dict[str, Any]) -> dict[str, Any]:
        """Set fields on the entity and return their previous values."""
        data = {
            k: v for k, v in data.items()
            if not (v is None and k in self.non_nullable_fields)
        }
        old_values = {k: getattr(entity, k) for k in data if hasattr(entity, k)}
        for field_name, value in data.items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)
        return old_values

    # =========================================================================
    # Validation Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        """
        Validate data before create.

        Raises:
            ValidationError: If validation fails.
        """
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        """
        Validate data before update.

        Raises:
            ValidationError: If validation fails.
        """
        pass

    def _validate_delete(self, entity: ModelT) -> None:
        """
        Validate before delete.

        Raises:
            ValidationError: If deletion is not allowed.
        """
        pass

    # =========================================================================
    # Lifecycle Hooks (override in subclasses)
    # =========================================================================

    def _after_create(self, entity: ModelT) -> None:
        """Hook called after entity creation. Override for side effects."""
        pass

    def _after_update(self, entity: ModelT, old_values: dict[str, Any]) -> None:
        """Hook called after entity update. Override for side effects."""
        pass

    def _after_delete(self, entity_info: dict[str, Any]) -> None:
        """Hook called after entity deletion."""
        logger.info(f"{self._entity_name} deleted", entity_id=entity_info["id"])

    def _get_entity_info(self, entity: ModelT) -> dict[str, Any]:
        """Entity info captured before deletion."""
        return {"id": entity.id}

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _commit(self, operation: str) -> None:
        """
        Commit the unit of work.

        Integrity violations (duplicate keys, broken references) surface as
        the service's conflict error; anything else becomes DatabaseError.
        """
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            logger.warning(
                f"Integrity error while trying to {operation}",
                error=str(e.orig) if e.orig else str(e),
            )
            raise self._integrity_error(e)
        except AppException:
            raise
        except Exception as e:
            logger.error(f"Failed to {operation}", error=str(e), exc_info=True)
            raise DatabaseError(operation)

    def _integrity_error(self, error: IntegrityError) -> AppException:
        """Exception raised for an integrity violation. Override per entity."""
        return ValidationError(f"Invalid {self._entity_name.lower()} data")

    def _validate_image_urls(self, data: dict[str, Any]) -> dict[str, Any]:
        """Validate and sanitize image URL fields."""
        for field_name in self._image_url_fields:
            if field_name in data and data[field_name]:
                try:
                    data[field_name] = validate_image_url(data[field_name])
                except ValueError as e:
                    raise ValidationError(str(e), field=field_name)
        return data
