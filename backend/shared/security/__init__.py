"""
Security module: bearer token verification, rate limiting.
"""

from shared.security.auth import (
    sign_id_token,
    verify_id_token,
    get_bearer_token,
    current_user_context,
)
from shared.security.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    REGISTRATION_LIMIT,
)

__all__ = [
    # auth
    "sign_id_token",
    "verify_id_token",
    "get_bearer_token",
    "current_user_context",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
    "REGISTRATION_LIMIT",
]
