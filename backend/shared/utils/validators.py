"""
Shared validators for input sanitization.
Used by services before persisting user-supplied URLs and by repositories
before building LIKE queries.
"""

import re
from urllib.parse import urlparse
from typing import Optional

# Hosts that must never appear in stored image URLs (SSRF prevention)
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "192.168.",
    "169.254.",  # Link-local and cloud metadata
    "::1",
    "metadata.google",
]

# 172.16.0.0/12
BLOCKED_HOSTS.extend(f"172.{n}." for n in range(16, 32))

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}

MAX_URL_LENGTH = 2048


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate and sanitize an image URL.

    Args:
        url: The URL to validate (can be None)

    Returns:
        The stripped URL, or None for empty input

    Raises:
        ValueError: If the URL is invalid or points to an internal host
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > MAX_URL_LENGTH:
        raise ValueError(f"Image URL is too long (max {MAX_URL_LENGTH} characters)")

    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")

    if scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS image URLs are allowed")

    host = (parsed.hostname or "").lower()
    if not host:
        raise ValueError("Image URL has no host")

    for blocked in BLOCKED_HOSTS:
        if host.startswith(blocked):
            raise ValueError("Internal image URLs are not allowed")

    return url


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards. Escaping them keeps user input
    from turning into a pattern.

    Args:
        value: The search string to escape

    Returns:
        The escaped string safe for use with ``escape="\\\\"``
    """
    if not value:
        return value

    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: str | None, max_length: int = 100) -> str:
    """
    Sanitize search term for safe use in queries.

    Args:
        term: The search term to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized search term (empty string for None)
    """
    if not term:
        return ""

    term = term.strip()

    if len(term) > max_length:
        term = term[:max_length]

    # Remove null bytes and other control characters
    term = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)

    return term
