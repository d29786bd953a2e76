"""
Generic CRUD routes for resource routers.

Every resource exposes the same seven routes on its prefix:

    GET    ""              list (paged, searchable, sortable, filterable)
    GET    "/{id}"         one entity
    POST   ""              create (201)
    PUT    "/{id}"         partial update
    DELETE "/{id}"         hard delete (204)
    POST   "/bulk-delete"  delete many, unknown IDs ignored
    POST   "/bulk-update"  same changes on many, unknown IDs -> 404

Routers register their extra routes first and call register_crud_routes()
last, so that static paths such as "/me" win over "/{id}".

Usage:
    router = APIRouter(prefix="/api/clients", dependencies=[Depends(current_user_context)])

    @router.get("/{client_id}/plans")
    def get_client_plans(...): ...

    register_crud_routes(router, CRUDRouteConfig(
        service=ClientService,
        create_schema=ClientCreate,
        update_schema=ClientUpdate,
        output_schema=ClientOutput,
        filters=client_filters,
    ))
"""

from dataclasses import dataclass
from typing import Any, Callable

import pydantic
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from rest_api.routers._common.pagination import ListParams, get_list_params, no_filters, paginated
from rest_api.services.base_service import BaseCRUDService
from shared.infrastructure.db import get_db
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    BulkUpdateRequest,
    BulkUpdateResponse,
    DataResponse,
    ListResponse,
    MessageResponse,
)


@dataclass
class CRUDRouteConfig:
    """Configuration for the generic routes of one resource."""

    # Required
    service: Callable[[Session], BaseCRUDService]
    create_schema: type[pydantic.BaseModel]
    update_schema: type[pydantic.BaseModel]
    output_schema: type[pydantic.BaseModel]

    # Dependency returning the entity-specific equality filters
    filters: Callable[..., dict[str, Any]] = no_filters

    # Routes to skip (e.g. "create" when registration lives elsewhere)
    exclude: frozenset[str] = frozenset()


def _validated_changes(schema: type[pydantic.BaseModel], data: dict[str, Any]) -> dict[str, Any]:
    """Validate a free-form bulk-update payload against the update schema."""
    try:
        return schema.model_validate(data).model_dump(exclude_unset=True)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "data"
        raise ValidationError(f"{field}: {first['msg']}", field=field)


def register_crud_routes(router: APIRouter, config: CRUDRouteConfig) -> None:
    """Attach the generic routes of one resource to ``router``."""
    make_service = config.service
    create_schema = config.create_schema
    update_schema = config.update_schema
    output_schema = config.output_schema

    # =========================================================================
    # Bulk operations (static paths before "/{entity_id}")
    # =========================================================================

    if "bulk" not in config.exclude:

        @router.post("/bulk-delete", response_model=BulkDeleteResponse)
        def bulk_delete(body: BulkDeleteRequest, db: Session = Depends(get_db)) -> dict:
            """Delete every existing entity in ``ids``."""
            service = make_service(db)
            deleted = service.bulk_delete(body.ids)
            return {
                "success": True,
                "deleted": deleted,
                "message": f"{deleted} {service.entity_name.lower()} record(s) deleted",
            }

        @router.post("/bulk-update", response_model=BulkUpdateResponse[output_schema])
        def bulk_update(body: BulkUpdateRequest, db: Session = Depends(get_db)) -> dict:
            """Apply the same changes to every entity in ``ids``."""
            changes = _validated_changes(update_schema, body.data)
            items = make_service(db).bulk_update(body.ids, changes)
            return {"data": items, "updated": len(items)}

    # =========================================================================
    # Collection
    # =========================================================================

    @router.get("", response_model=ListResponse[output_schema])
    def list_items(
        params: ListParams = Depends(get_list_params),
        filters: dict[str, Any] = Depends(config.filters),
        db: Session = Depends(get_db),
    ) -> dict:
        """List one page of entities."""
        items, pagination = make_service(db).list_page(params.to_filters(filters))
        return paginated(items, pagination)

    if "create" not in config.exclude:

        @router.post(
            "",
            response_model=MessageResponse[output_schema],
            status_code=status.HTTP_201_CREATED,
        )
        def create_item(body: create_schema, db: Session = Depends(get_db)) -> dict:
            """Create an entity."""
            service = make_service(db)
            item = service.create(body.model_dump())
            return {"data": item, "message": f"{service.entity_name} created successfully"}

    # =========================================================================
    # Single entity
    # =========================================================================

    @router.get("/{entity_id}", response_model=DataResponse[output_schema])
    def get_item(entity_id: int, db: Session = Depends(get_db)) -> dict:
        """Get one entity."""
        return {"data": make_service(db).get_by_id(entity_id)}

    @router.put("/{entity_id}", response_model=MessageResponse[output_schema])
    def update_item(entity_id: int, body: update_schema, db: Session = Depends(get_db)) -> dict:
        """Update the fields present in the body."""
        service = make_service(db)
        item = service.update(entity_id, body.model_dump(exclude_unset=True))
        return {"data": item, "message": f"{service.entity_name} updated successfully"}

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_item(entity_id: int, db: Session = Depends(get_db)) -> Response:
        """Hard delete an entity."""
        make_service(db).delete(entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
