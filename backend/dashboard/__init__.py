"""
Dashboard client layer.

Async CRUD access to the REST API with client-side validation, a hook-based
controller, an observable store and the domain pages (clients, trainers,
feedback).
"""

from dashboard.controller import CRUDController, CRUDHooks, OperationResult
from dashboard.entity import (
    ApiResponse,
    CRUDState,
    Entity,
    FetchParams,
    Pagination,
    ValidationError,
    ValidationResult,
)
from dashboard.notifying import EntityMessages, Notifier, NotifyingTransport
from dashboard.pages import ClientsPage, FeedbackPage, TrainersPage, bmi_category
from dashboard.store import CRUDStore
from dashboard.transport import (
    CRUDTransport,
    NotFoundTransportError,
    TransportConfig,
    TransportError,
)

__all__ = [
    "ApiResponse",
    "CRUDController",
    "CRUDHooks",
    "CRUDState",
    "CRUDStore",
    "CRUDTransport",
    "ClientsPage",
    "Entity",
    "EntityMessages",
    "FeedbackPage",
    "FetchParams",
    "NotFoundTransportError",
    "Notifier",
    "NotifyingTransport",
    "OperationResult",
    "Pagination",
    "TrainersPage",
    "TransportConfig",
    "TransportError",
    "ValidationError",
    "ValidationResult",
    "bmi_category",
]
