"""
Transport wrapper that reports the outcome of mutating calls.

Success and failure are pushed to user-supplied callbacks (a toast, a
status bar, a log line) and the original result or error is passed on
unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from dashboard.entity import DeleteResponse, Entity
from dashboard.transport import CRUDTransport
from shared.config.logging import dashboard_logger as logger

ResultT = TypeVar("ResultT")

Notify = Callable[[str], None]


def _noop(message: str) -> None:
    return None


@dataclass
class Notifier:
    """Callbacks receiving user-facing messages."""

    on_success: Notify = _noop
    on_error: Notify = _noop


@dataclass
class OperationMessages:
    success: str | None = None
    error: str | None = None


@dataclass
class EntityMessages:
    """Per-operation messages, defaulting to "<Entity> created successfully" and so on."""

    entity: str
    overrides: dict[str, OperationMessages] = field(default_factory=dict)

    def for_operation(self, operation: str) -> OperationMessages:
        if operation in self.overrides:
            return self.overrides[operation]
        past = {"create": "created", "update": "updated", "delete": "deleted"}[operation]
        return OperationMessages(
            success=f"{self.entity} {past} successfully",
            error=f"Failed to {operation} {self.entity.lower()}",
        )


async def with_notifications(
    call: Awaitable[ResultT],
    notifier: Notifier,
    messages: OperationMessages,
) -> ResultT:
    """
    Await ``call``, notify, and return its result.

    The error callback gets ``messages.error`` when set, otherwise the
    exception text. The exception is re-raised after notifying.
    """
    try:
        result = await call
    except Exception as e:
        message = messages.error or str(e) or "An error occurred"
        logger.warning("Operation failed", error=str(e), notified=message)
        notifier.on_error(message)
        raise
    if messages.success:
        notifier.on_success(messages.success)
    return result


class NotifyingTransport:
    """
    CRUDTransport with notifications on create, update and delete.

    Reads (fetch_all, fetch_by_id) pass straight through without
    notifying.
    """

    def __init__(
        self,
        transport: CRUDTransport,
        notifier: Notifier,
        messages: EntityMessages,
    ):
        self._transport = transport
        self._notifier = notifier
        self._messages = messages

    def __getattr__(self, name: str) -> Any:
        return getattr(self._transport, name)

    async def create(self, data: dict[str, Any]) -> Entity:
        return await with_notifications(
            self._transport.create(data),
            self._notifier,
            self._messages.for_operation("create"),
        )

    async def update(self, entity_id: Any, data: dict[str, Any]) -> Entity:
        return await with_notifications(
            self._transport.update(entity_id, data),
            self._notifier,
            self._messages.for_operation("update"),
        )

    async def delete(self, entity_id: Any) -> DeleteResponse:
        return await with_notifications(
            self._transport.delete(entity_id),
            self._notifier,
            self._messages.for_operation("delete"),
        )

    async def delete_many(self, ids: Sequence[Any]) -> DeleteResponse:
        return await with_notifications(
            self._transport.delete_many(ids),
            self._notifier,
            self._messages.for_operation("delete"),
        )

    async def update_many(self, ids: Sequence[Any], data: dict[str, Any]) -> list[Entity]:
        return await with_notifications(
            self._transport.update_many(ids, data),
            self._notifier,
            self._messages.for_operation("update"),
        )
