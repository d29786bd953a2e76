"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    ValidationError,
    ConflictError,
    DuplicateEntityError,
)
from shared.utils.validators import (
    validate_image_url,
    escape_like_pattern,
    sanitize_search_term,
)
from shared.utils.schemas import CamelModel

__all__ = [
    # exceptions
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "DuplicateEntityError",
    # validators
    "validate_image_url",
    "escape_like_pattern",
    "sanitize_search_term",
    # schemas
    "CamelModel",
]
