"""
Entity contract shared by the dashboard layer.

Records travel as plain dicts with the API's camelCase keys (``id``,
``createdAt``, ``updatedAt`` plus entity fields). The envelopes around
them are parsed with pydantic; client-side state is plain dataclasses.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Entity = dict[str, Any]

Operation = Literal["list", "create", "update", "delete"]


def entity_id(item: Entity) -> Any:
    return item.get("id")


# =============================================================================
# Request parameters
# =============================================================================


@dataclass
class FetchParams:
    """List parameters sent as the query string of ``fetch_all``."""

    page: int | None = None
    limit: int | None = None
    search: str | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None
    filters: dict[str, Any] = field(default_factory=dict)

    def to_query(self) -> list[tuple[str, str]]:
        """
        Query pairs in wire order: page, limit, search, sortBy, sortOrder,
        then filters in insertion order. None and "" are skipped.
        """
        pairs = [
            ("page", self.page),
            ("limit", self.limit),
            ("search", self.search),
            ("sortBy", self.sort_by),
            ("sortOrder", self.sort_order),
            *self.filters.items(),
        ]
        return [(key, _query_value(value)) for key, value in pairs if value is not None and value != ""]

    def merged(self, other: "FetchParams | None") -> "FetchParams":
        """Return a copy where every value set on ``other`` wins."""
        if other is None:
            return FetchParams(
                self.page, self.limit, self.search, self.sort_by, self.sort_order, dict(self.filters)
            )
        return FetchParams(
            page=other.page if other.page is not None else self.page,
            limit=other.limit if other.limit is not None else self.limit,
            search=other.search if other.search is not None else self.search,
            sort_by=other.sort_by if other.sort_by is not None else self.sort_by,
            sort_order=other.sort_order if other.sort_order is not None else self.sort_order,
            filters={**self.filters, **other.filters},
        )


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# =============================================================================
# Response envelopes
# =============================================================================


class _Envelope(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Pagination(_Envelope):
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0


class ApiResponse(_Envelope):
    data: list[Entity] = Field(default_factory=list)
    pagination: Pagination | None = None


class CreateResponse(_Envelope):
    data: Entity
    message: str | None = None


class UpdateResponse(_Envelope):
    data: Entity
    message: str | None = None


class BulkUpdateResponse(_Envelope):
    data: list[Entity] = Field(default_factory=list)
    updated: int = 0


class DeleteResponse(_Envelope):
    success: bool
    message: str | None = None
    deleted: int | None = None


# =============================================================================
# Validation results
# =============================================================================


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


@dataclass
class ValidationResult:
    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def message(self) -> str:
        return ", ".join(e.message for e in self.errors)


# =============================================================================
# Client-side state
# =============================================================================


@dataclass
class PageState:
    page: int = 1
    limit: int = 10
    total: int = 0


@dataclass
class CRUDState:
    """Collection state held by the controller and the store."""

    items: list[Entity] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    selected_item: Entity | None = None
    pagination: PageState = field(default_factory=PageState)
    filters: dict[str, Any] = field(default_factory=dict)
    search_query: str = ""
