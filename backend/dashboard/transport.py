"""
CRUD transport over the REST API.

One CRUDTransport per resource endpoint. Calls are async and go through a
shared httpx.AsyncClient that is created lazily (or injected). Failed
responses are turned into TransportError with a readable message taken
from the error body.

Usage:
    transport = CRUDTransport(
        "/clients",
        TransportConfig(base_url="http://localhost:3000/api", token=token),
    )
    page = await transport.fetch_all(FetchParams(page=1, limit=20))
    client = await transport.fetch_by_id(page.data[0]["id"])
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import httpx

from dashboard.entity import (
    ApiResponse,
    DeleteResponse,
    Entity,
    FetchParams,
)
from shared.config.logging import dashboard_logger as logger


# =============================================================================
# Errors
# =============================================================================


class TransportError(Exception):
    """A request failed. ``status`` is None when no response was received."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class NotFoundTransportError(TransportError):
    """The API answered 404."""


def error_message_from(response: httpx.Response) -> str:
    """
    Extract a readable message from an error response.

    Precedence: ``message``, ``error``, ``detail`` (string), ``errors``
    (joined with ", "), then "HTTP <status>: <reason>".
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return ", ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in errors
            )

    return f"HTTP {response.status_code}: {response.reason_phrase}"


# =============================================================================
# Transport
# =============================================================================


@dataclass
class TransportConfig:
    """
    Connection settings for a transport.

    ``token`` is sent as is; ``token_provider`` is called on every request
    and wins over ``token`` when both are set. ``client`` replaces the
    lazily created httpx.AsyncClient (useful for timeouts and tests).
    """

    base_url: str = "/api"
    token: str | None = None
    token_provider: Callable[[], str | None] | None = None
    client: httpx.AsyncClient | None = None

    def current_token(self) -> str | None:
        if self.token_provider is not None:
            return self.token_provider()
        return self.token


class CRUDTransport:
    """Typed CRUD calls against one resource endpoint."""

    def __init__(self, endpoint: str, config: TransportConfig | None = None):
        self.config = config or TransportConfig()
        self.endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        self.base_url = self.config.base_url.rstrip("/")
        self._client: httpx.AsyncClient | None = self.config.client
        self._owns_client = self.config.client is None
        self._client_lock: asyncio.Lock | None = None

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client. No timeout unless one is injected."""
        if self._client is not None and not self._client.is_closed:
            return self._client

        if self._client_lock is None:
            self._client_lock = asyncio.Lock()
        async with self._client_lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(timeout=None)
                self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.config.current_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str = "",
        *,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Send one request and return the decoded body (None when empty).

        Raises:
            NotFoundTransportError: On 404.
            TransportError: On any other non-2xx status or network failure.
        """
        client = await self._get_client()
        url = f"{self.url}{path}"
        try:
            response = await client.request(
                method, url, params=params, json=json, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.warning("Request failed", method=method, url=url, error=str(e))
            raise TransportError(str(e) or "Network error") from e

        if not response.is_success:
            message = error_message_from(response)
            logger.debug(
                "Request rejected",
                method=method,
                url=url,
                status=response.status_code,
                error=message,
            )
            if response.status_code == 404:
                raise NotFoundTransportError(message, 404)
            raise TransportError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # =========================================================================
    # Operations
    # =========================================================================

    async def fetch_all(self, params: FetchParams | None = None) -> ApiResponse:
        """Fetch one page of entities."""
        query = (params or FetchParams()).to_query()
        payload = await self._request("GET", params=query)
        return ApiResponse.model_validate(payload or {})

    async def fetch_by_id(self, entity_id: Any) -> Entity:
        payload = await self._request("GET", f"/{entity_id}")
        return _data(payload)

    async def create(self, data: dict[str, Any]) -> Entity:
        payload = await self._request("POST", json=data)
        return _data(payload)

    async def update(self, entity_id: Any, data: dict[str, Any]) -> Entity:
        payload = await self._request("PUT", f"/{entity_id}", json=data)
        return _data(payload)

    async def delete(self, entity_id: Any) -> DeleteResponse:
        await self._request("DELETE", f"/{entity_id}")
        return DeleteResponse(success=True)

    async def delete_many(self, ids: Sequence[Any]) -> DeleteResponse:
        payload = await self._request("POST", "/bulk-delete", json={"ids": list(ids)})
        if payload is None:
            return DeleteResponse(success=True)
        return DeleteResponse.model_validate(payload)

    async def update_many(self, ids: Sequence[Any], data: dict[str, Any]) -> list[Entity]:
        payload = await self._request(
            "POST", "/bulk-update", json={"ids": list(ids), "data": data}
        )
        return list((payload or {}).get("data", []))


def _data(payload: Any) -> Entity:
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload
