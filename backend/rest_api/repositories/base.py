"""
Base Repository implementation.
Provides common data access patterns: paging, free-text search, whitelisted
sorting and entity-specific filters.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any, Sequence

from sqlalchemy import Select, select, func, or_, ColumnElement
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.utils.validators import escape_like_pattern, sanitize_search_term


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Pagination (1-indexed page)
    page: int = 1
    limit: int = Limits.DEFAULT_PAGE_SIZE

    # Search
    search: str | None = None

    # Sorting
    sort_by: str | None = None
    sort_order: str = "desc"

    # Entity-specific equality filters (snake_case column names)
    filters: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate and normalize filters."""
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.search = sanitize_search_term(self.search) if self.search else None
        self.sort_order = "asc" if (self.sort_order or "").lower() == "asc" else "desc"
        self.filters = {k: v for k, v in self.filters.items() if v is not None and v != ""}

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    - _base_query(): base select with eager loading

    And may set:
    - search_columns: columns matched by free-text search (ILIKE)
    - sort_fields: camelCase sort key -> column whitelist
    - filter_columns: filter key -> column for equality filters
    """

    search_columns: tuple[str, ...] = ()
    sort_fields: dict[str, str] = {}
    filter_columns: dict[str, str] = {}

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """
        Return base query with proper eager loading.
        Subclasses must implement this with selectinload/joinedload.
        """
        ...

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply entity-specific filters to query. Override for non-equality filters."""
        for key, value in filters.filters.items():
            column_name = self.filter_columns.get(key)
            if column_name is None:
                continue
            query = query.where(getattr(self.model, column_name) == value)
        return query

    def _search_clause(self, term: str) -> ColumnElement[bool] | None:
        """Case-insensitive substring match over ``search_columns``."""
        if not self.search_columns:
            return None
        pattern = f"%{escape_like_pattern(term)}%"
        return or_(
            *[
                getattr(self.model, column).ilike(pattern, escape="\\")
                for column in self.search_columns
            ]
        )

    def _apply_search(self, query: Select, filters: RepositoryFilters) -> Select:
        if not filters.search:
            return query
        clause = self._search_clause(filters.search)
        return query.where(clause) if clause is not None else query

    def _apply_sort(self, query: Select, filters: RepositoryFilters) -> Select:
        """Sort by a whitelisted field, falling back to creation time."""
        allowed = {"createdAt": "created_at", "updatedAt": "updated_at", **self.sort_fields}
        column_name = allowed.get(filters.sort_by or "", "created_at")
        column = getattr(self.model, column_name)
        ordering = column.asc() if filters.sort_order == "asc" else column.desc()
        return query.order_by(ordering, self.model.id.desc())

    def _filtered(self, query: Select, filters: RepositoryFilters) -> Select:
        query = self._apply_filters(query, filters)
        return self._apply_search(query, filters)

    def find_page(self, filters: RepositoryFilters | None = None) -> tuple[Sequence[ModelT], int]:
        """
        Find one page of entities matching filters.

        Returns:
            (entities, total count before paging)
        """
        filters = filters or RepositoryFilters()

        query = self._filtered(self._base_query(), filters)
        query = self._apply_sort(query, filters)
        query = query.offset(filters.offset).limit(filters.limit)
        entities = self._db.execute(query).scalars().unique().all()

        return entities, self.count(filters)

    def find_all(self, filters: RepositoryFilters | None = None) -> Sequence[ModelT]:
        """Find all entities matching filters (no paging)."""
        filters = filters or RepositoryFilters()
        query = self._apply_sort(self._filtered(self._base_query(), filters), filters)
        return self._db.execute(query).scalars().unique().all()

    def find_by_id(self, entity_id: int) -> ModelT | None:
        """Find entity by ID."""
        query = self._base_query().where(self.model.id == entity_id)
        return self._db.scalar(query)

    def find_by_ids(self, entity_ids: Sequence[int]) -> Sequence[ModelT]:
        """Find entities by IDs (order not guaranteed)."""
        if not entity_ids:
            return []
        query = self._base_query().where(self.model.id.in_(list(entity_ids)))
        return self._db.execute(query).scalars().unique().all()

    def find_one_by(self, **criteria: Any) -> ModelT | None:
        """Find the first entity whose columns equal ``criteria``."""
        query = self._base_query()
        for column_name, value in criteria.items():
            query = query.where(getattr(self.model, column_name) == value)
        return self._db.scalar(query.limit(1))

    def count(self, filters: RepositoryFilters | None = None) -> int:
        """Count entities matching filters."""
        filters = filters or RepositoryFilters()
        query = self._filtered(select(self.model.id), filters)
        return self._db.scalar(select(func.count()).select_from(query.subquery())) or 0

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists."""
        query = select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        return (self._db.scalar(query) or 0) > 0

    def add(self, entity: ModelT) -> ModelT:
        """Stage entity for insert and flush to obtain its ID."""
        self._db.add(entity)
        self._db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity."""
        self._db.delete(entity)
        self._db.flush()
