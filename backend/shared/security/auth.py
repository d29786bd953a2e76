"""
Authentication utilities.

Bearer tokens are issued by the identity provider; this module only verifies
them. Tokens are HS256 JWTs carrying:
- sub: identity-provider uid (matches User.firebase_uid)
- email, email_verified
- iss / aud / iat / exp

``sign_id_token`` exists for tests and local tooling that need a token
without the provider.
"""

from __future__ import annotations

import time
from typing import Any

import jwt
from fastapi import Header, Request

from shared.config.settings import settings
from shared.config.logging import get_logger, audit_auth_event
from shared.utils.exceptions import UnauthorizedError

logger = get_logger(__name__)

MISSING_TOKEN_MESSAGE = "Unauthorized: Missing or invalid token"
INVALID_TOKEN_MESSAGE = "Unauthorized: Invalid token"


def sign_id_token(
    uid: str,
    email: str | None = None,
    email_verified: bool = False,
    ttl_seconds: int | None = None,
) -> str:
    """
    Sign an identity token with the configured secret.

    Args:
        uid: Identity-provider uid placed in the ``sub`` claim.
        email: Email claim.
        email_verified: Whether the provider verified the email.
        ttl_seconds: Token lifetime. Defaults to settings.auth_token_expire_minutes.

    Returns:
        Signed JWT string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.auth_token_expire_minutes * 60

    now = int(time.time())
    payload = {
        "sub": uid,
        "email": email,
        "email_verified": email_verified,
        "iss": settings.auth_issuer,
        "aud": settings.auth_audience,
        "iat": now,
        "exp": now + ttl_seconds,
    }
    return jwt.encode(payload, settings.auth_secret, algorithm="HS256")


def verify_id_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an identity token.

    Args:
        token: The JWT string.

    Returns:
        User context: uid, email, email_verified.

    Raises:
        UnauthorizedError: If the token is invalid, expired or has no subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.auth_secret,
            algorithms=["HS256"],
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
        )
    except jwt.ExpiredSignatureError:
        audit_auth_event("TOKEN_REJECTED", success=False, reason="expired")
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE, reason="expired")
    except jwt.InvalidTokenError as e:
        # Log the actual error, return a generic message to the client
        audit_auth_event("TOKEN_REJECTED", success=False, reason=str(e))
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE, reason="invalid")

    uid = payload.get("sub")
    if not uid or not isinstance(uid, str):
        audit_auth_event("TOKEN_REJECTED", success=False, reason="missing subject")
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE, reason="missing subject")

    return {
        "uid": uid,
        "email": payload.get("email"),
        "email_verified": bool(payload.get("email_verified", False)),
    }


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Args:
        authorization: The Authorization header value.

    Returns:
        The token string without "Bearer " prefix.

    Raises:
        UnauthorizedError: If header is missing or malformed.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError(MISSING_TOKEN_MESSAGE, reason="missing header")

    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError(MISSING_TOKEN_MESSAGE, reason="empty token")
    return token


def current_user_context(
    request: Request,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the current user context from the bearer token.

    Usage:
        @router.get("/me")
        def me(user: dict = Depends(current_user_context)):
            uid = user["uid"]

    The context is also stored on ``request.state.user``.

    Returns:
        Dict with: uid, email, email_verified
    """
    token = get_bearer_token(authorization)
    user = verify_id_token(token)
    request.state.user = user
    return user
