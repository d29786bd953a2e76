"""
Standardized list parameters for all resource routers.

Every list endpoint accepts the same query string:
page, limit, search, sortBy, sortOrder. Entity filters are declared per
router and merged into the same RepositoryFilters.

Usage:
    from rest_api.routers._common.pagination import ListParams, get_list_params

    @router.get("")
    def list_items(params: ListParams = Depends(get_list_params), db: Session = Depends(get_db)):
        items, pagination = service.list_page(params.to_filters({"status": status}))
        return paginated(items, pagination)
"""

from dataclasses import dataclass
from typing import Any, Literal

from fastapi import Query

from rest_api.repositories.base import RepositoryFilters
from shared.config.constants import Limits


@dataclass
class ListParams:
    """Validated list query parameters."""

    page: int = 1
    limit: int = Limits.DEFAULT_PAGE_SIZE
    search: str | None = None
    sort_by: str | None = None
    sort_order: str = "desc"

    def to_filters(self, filters: dict[str, Any] | None = None) -> RepositoryFilters:
        """Build repository filters with the entity-specific equality filters."""
        return RepositoryFilters(
            page=self.page,
            limit=self.limit,
            search=self.search,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            filters=dict(filters or {}),
        )


def get_list_params(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
    search: str | None = Query(default=None, description="Free-text search"),
    sort_by: str | None = Query(default=None, alias="sortBy", description="Sort field"),
    sort_order: Literal["asc", "desc"] = Query(default="desc", alias="sortOrder"),
) -> ListParams:
    """FastAPI dependency for list parameters."""
    return ListParams(
        page=page,
        limit=limit,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def no_filters() -> dict[str, Any]:
    """Filter dependency for resources without entity filters."""
    return {}


def paginated(items: list[Any], pagination: dict[str, int]) -> dict[str, Any]:
    """
    Build the list envelope.

    Returns:
        {"data": [...], "pagination": {page, limit, total, totalPages}}
    """
    return {
        "data": items,
        "pagination": {
            "page": pagination["page"],
            "limit": pagination["limit"],
            "total": pagination["total"],
            "totalPages": pagination["total_pages"],
        },
    }
