"""
Common utilities shared across routers.
"""

from .pagination import ListParams, get_list_params, no_filters, paginated
from .crud import CRUDRouteConfig, register_crud_routes

__all__ = [
    # List parameters
    "ListParams",
    "get_list_params",
    "no_filters",
    "paginated",
    # Generic CRUD routes
    "CRUDRouteConfig",
    "register_crud_routes",
]
