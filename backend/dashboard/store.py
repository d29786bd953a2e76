"""
Observable CRUD state container.

CRUDStore keeps a CRUDState for one resource, talks to the transport
directly and notifies subscribers after every state change. Changing the
page, the filters or the search query refetches once the store has been
mounted.

Concurrent fetches are not cancelled; instead each fetch is tagged with a
sequence number and only the latest one may write its result (or error)
to the state.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

from dashboard.entity import CRUDState, Entity, FetchParams, PageState, entity_id
from dashboard.transport import CRUDTransport
from shared.config.logging import dashboard_logger as logger

Listener = Callable[[CRUDState], None]


class CRUDStore:
    """State plus async actions for one resource collection."""

    def __init__(self, transport: CRUDTransport, initial_params: FetchParams | None = None):
        self.transport = transport
        self.initial_params = initial_params or FetchParams()
        self.state = CRUDState()
        self._listeners: list[Listener] = []
        self._fetch_seq = 0
        self._mounted = False

    # =========================================================================
    # Subscription
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _set(self, **changes: Any) -> None:
        for name, value in changes.items():
            setattr(self.state, name, value)
        for listener in list(self._listeners):
            listener(self.state)

    # =========================================================================
    # Fetching
    # =========================================================================

    async def mount(self) -> None:
        """Perform the initial fetch and start refetching on parameter changes."""
        self._mounted = True
        await self.fetch_items()

    def build_params(self, params: FetchParams | None = None) -> FetchParams:
        """initial_params, then current state, then ``params``; later wins."""
        state = self.state
        current = FetchParams(
            page=state.pagination.page,
            limit=state.pagination.limit,
            search=state.search_query or None,
            filters=dict(state.filters),
        )
        return self.initial_params.merged(current).merged(params)

    async def fetch_items(self, params: FetchParams | None = None) -> None:
        self._fetch_seq += 1
        seq = self._fetch_seq
        self._set(loading=True, error=None)

        try:
            response = await self.transport.fetch_all(self.build_params(params))
            if seq != self._fetch_seq:
                logger.debug("Discarded stale fetch result", seq=seq, latest=self._fetch_seq)
                return

            pagination = self.state.pagination
            if response.pagination is not None:
                pagination = PageState(
                    page=response.pagination.page,
                    limit=response.pagination.limit,
                    total=response.pagination.total,
                )
            self._set(items=list(response.data), pagination=pagination)
        except Exception as e:
            if seq != self._fetch_seq:
                logger.debug("Discarded stale fetch error", seq=seq, latest=self._fetch_seq)
                return
            message = str(e) or "An error occurred"
            logger.error("Failed to fetch items", endpoint=self.transport.endpoint, error=message)
            self._set(error=message)
        finally:
            if seq == self._fetch_seq:
                self._set(loading=False)

    async def refresh(self) -> None:
        await self.fetch_items()

    async def _refetch_if_mounted(self) -> None:
        if self._mounted:
            await self.fetch_items()

    # =========================================================================
    # Mutations
    # =========================================================================

    def _fail(self, fallback: str, error: Exception) -> bool:
        message = str(error) or fallback
        logger.error(fallback, endpoint=self.transport.endpoint, error=message)
        self._set(error=message)
        return False

    async def create_item(self, data: dict[str, Any]) -> bool:
        self._set(loading=True, error=None)
        try:
            item = await self.transport.create(data)
            self._set(items=[item, *self.state.items])
            return True
        except Exception as e:
            return self._fail("Failed to create item", e)
        finally:
            self._set(loading=False)

    async def update_item(self, item_id: Any, data: dict[str, Any]) -> bool:
        self._set(loading=True, error=None)
        try:
            item = await self.transport.update(item_id, data)
            selected = self.state.selected_item
            self._set(
                items=[item if entity_id(i) == item_id else i for i in self.state.items],
                selected_item=item if selected is not None and entity_id(selected) == item_id else selected,
            )
            return True
        except Exception as e:
            return self._fail("Failed to update item", e)
        finally:
            self._set(loading=False)

    async def delete_item(self, item_id: Any) -> bool:
        self._set(loading=True, error=None)
        try:
            await self.transport.delete(item_id)
            selected = self.state.selected_item
            self._set(
                items=[i for i in self.state.items if entity_id(i) != item_id],
                selected_item=None if selected is not None and entity_id(selected) == item_id else selected,
            )
            return True
        except Exception as e:
            return self._fail("Failed to delete item", e)
        finally:
            self._set(loading=False)

    # =========================================================================
    # Selection and parameters
    # =========================================================================

    def set_selected_item(self, item: Entity | None) -> None:
        self._set(selected_item=item)

    async def set_filters(self, filters: dict[str, Any]) -> None:
        self._set(filters=dict(filters), pagination=replace(self.state.pagination, page=1))
        await self._refetch_if_mounted()

    async def set_search_query(self, query: str) -> None:
        self._set(search_query=query, pagination=replace(self.state.pagination, page=1))
        await self._refetch_if_mounted()

    async def set_page(self, page: int) -> None:
        self._set(pagination=replace(self.state.pagination, page=page))
        await self._refetch_if_mounted()
