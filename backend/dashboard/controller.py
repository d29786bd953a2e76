"""
Business-logic controller for one resource collection.

CRUDController runs every operation through the same pipeline:

    validate -> preprocess -> transport call -> postprocess
             -> apply to state -> on_success

with ``loading`` raised for the duration and any failure turned into
``state.error``. Entity-specific behaviour is supplied through CRUDHooks
rather than subclassing; hooks may be plain functions or coroutines.

Usage:
    controller = CRUDController(
        CRUDTransport("/clients", config),
        CRUDHooks(validate=lambda data, op: validate_client(data, op)),
    )
    result = await controller.create({"userId": 3, "goals": "Run 10k"})
    if not result.success:
        print(controller.state.error)
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from dashboard.entity import (
    CRUDState,
    Entity,
    FetchParams,
    Operation,
    PageState,
    ValidationResult,
    entity_id,
)
from dashboard.transport import CRUDTransport
from shared.config.logging import dashboard_logger as logger

FALLBACK_MESSAGES: dict[str, str] = {
    "list": "Failed to load items",
    "create": "Failed to create item",
    "update": "Failed to update item",
    "delete": "Failed to delete item",
}


def _always_valid(data: Any, operation: Operation) -> ValidationResult:
    return ValidationResult(is_valid=True)


def _identity(value: Any, operation: Operation) -> Any:
    return value


def _noop(item: Any, operation: Operation) -> None:
    return None


async def _call_hook(hook: Callable[..., Any], *args: Any) -> Any:
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


@dataclass
class CRUDHooks:
    """
    Optional extension points of the pipeline.

    For "list", ``preprocess`` receives the FetchParams and ``postprocess``
    the list of items. For "delete", both receive the id.
    """

    validate: Callable[[Any, Operation], ValidationResult | Awaitable[ValidationResult]] = _always_valid
    preprocess: Callable[[Any, Operation], Any] = _identity
    postprocess: Callable[[Any, Operation], Any] = _identity
    on_success: Callable[[Any, Operation], Any] = _noop


@dataclass
class OperationResult:
    success: bool
    data: Any = None
    error: str | None = None


class CRUDController:
    """Runs CRUD operations against a transport and keeps a CRUDState."""

    def __init__(
        self,
        transport: CRUDTransport,
        hooks: CRUDHooks | None = None,
        state: CRUDState | None = None,
    ):
        self.transport = transport
        self.hooks = hooks or CRUDHooks()
        self.state = state or CRUDState()

    # =========================================================================
    # Operations
    # =========================================================================

    async def load(self, params: FetchParams | None = None) -> OperationResult:
        async def call(prepared: FetchParams | None):
            return await self.transport.fetch_all(prepared)

        return await self._run("list", params, call, self._apply_list)

    async def create(self, data: dict[str, Any]) -> OperationResult:
        async def call(prepared: dict[str, Any]):
            return await self.transport.create(prepared)

        return await self._run("create", data, call, self._apply_create)

    async def update(self, item_id: Any, data: dict[str, Any]) -> OperationResult:
        async def call(prepared: dict[str, Any]):
            return await self.transport.update(item_id, prepared)

        return await self._run("update", data, call, self._apply_update)

    async def delete(self, item_id: Any) -> OperationResult:
        async def call(prepared: Any):
            await self.transport.delete(prepared)
            return prepared

        return await self._run("delete", item_id, call, self._apply_delete)

    def select(self, item: Entity | None) -> None:
        self.state.selected_item = item

    # =========================================================================
    # Pipeline
    # =========================================================================

    async def _run(
        self,
        operation: Operation,
        data: Any,
        call: Callable[[Any], Awaitable[Any]],
        apply: Callable[[Any, Any], None],
    ) -> OperationResult:
        state = self.state
        snapshot = (list(state.items), state.selected_item, state.pagination)

        state.loading = True
        state.error = None
        try:
            validation = await _call_hook(self.hooks.validate, data, operation)
            if not validation.is_valid:
                state.error = validation.message
                return OperationResult(success=False, error=state.error)

            prepared = await _call_hook(self.hooks.preprocess, data, operation)
            response = await call(prepared)
            result = await _call_hook(self.hooks.postprocess, _payload(response), operation)

            apply(result, response)
            await _call_hook(self.hooks.on_success, result, operation)
            return OperationResult(success=True, data=result)
        except Exception as e:
            message = str(e) or FALLBACK_MESSAGES[operation]
            logger.error(FALLBACK_MESSAGES[operation], error=message)
            state.items, state.selected_item, state.pagination = snapshot
            state.error = message
            return OperationResult(success=False, error=message)
        finally:
            state.loading = False

    def _apply_list(self, items: list[Entity], response: Any) -> None:
        self.state.items = list(items)
        pagination = getattr(response, "pagination", None)
        if pagination is not None:
            self.state.pagination = PageState(
                page=pagination.page, limit=pagination.limit, total=pagination.total
            )

    def _apply_create(self, item: Entity, response: Any) -> None:
        self.state.items = [item, *self.state.items]

    def _apply_update(self, item: Entity, response: Any) -> None:
        target = entity_id(item)
        self.state.items = [item if entity_id(i) == target else i for i in self.state.items]
        selected = self.state.selected_item
        if selected is not None and entity_id(selected) == target:
            self.state.selected_item = item

    def _apply_delete(self, item_id: Any, response: Any) -> None:
        self.state.items = [i for i in self.state.items if entity_id(i) != item_id]
        selected = self.state.selected_item
        if selected is not None and entity_id(selected) == item_id:
            self.state.selected_item = None


def _payload(response: Any) -> Any:
    """The part of a transport result handed to ``postprocess``."""
    data = getattr(response, "data", None)
    if data is not None and hasattr(response, "pagination"):
        return data
    return response
