"""
Tests for the dashboard transport and its notifying wrapper.

Requests are answered by httpx.MockTransport so no server is needed.
"""

import json

import httpx
import pytest

from dashboard.entity import FetchParams
from dashboard.notifying import (
    EntityMessages,
    Notifier,
    NotifyingTransport,
    OperationMessages,
    with_notifications,
)
from dashboard.transport import (
    CRUDTransport,
    NotFoundTransportError,
    TransportConfig,
    TransportError,
    error_message_from,
)


def make_transport(handler, endpoint="/clients", **config):
    """Transport bound to an in-process handler; returns (transport, seen requests)."""
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    transport = CRUDTransport(
        endpoint, TransportConfig(base_url="http://api.test/api", client=client, **config)
    )
    return transport, seen


def _json(status, body):
    return lambda request: httpx.Response(status, json=body)


class TestErrorMessage:

    @pytest.mark.parametrize(
        "body,expected",
        [
            ({"message": "m", "error": "e"}, "m"),
            ({"error": "Trainer with ID 9 not found"}, "Trainer with ID 9 not found"),
            ({"detail": "Not allowed"}, "Not allowed"),
            (
                {"errors": [{"field": "rating", "message": "too high"}, "plain"]},
                "too high, plain",
            ),
        ],
    )
    def test_precedence(self, body, expected):
        response = httpx.Response(400, json=body)
        assert error_message_from(response) == expected

    def test_falls_back_to_status_line(self):
        response = httpx.Response(502, text="<html>bad gateway</html>")
        assert error_message_from(response) == "HTTP 502: Bad Gateway"

    def test_non_string_detail_is_skipped(self):
        response = httpx.Response(400, json={"detail": [{"msg": "x"}]})
        assert error_message_from(response) == "HTTP 400: Bad Request"


class TestCRUDTransport:

    @pytest.mark.asyncio
    async def test_fetch_all_query_order(self):
        transport, seen = make_transport(
            _json(200, {"data": [{"id": 1}], "pagination": {"page": 2, "limit": 5, "total": 6, "totalPages": 2}})
        )
        params = FetchParams(
            page=2, limit=5, search="ann", sort_by="name", sort_order="asc",
            filters={"trainerId": 3, "isActive": True, "empty": ""},
        )
        page = await transport.fetch_all(params)

        assert list(seen[0].url.params.multi_items()) == [
            ("page", "2"),
            ("limit", "5"),
            ("search", "ann"),
            ("sortBy", "name"),
            ("sortOrder", "asc"),
            ("trainerId", "3"),
            ("isActive", "true"),
        ]
        assert seen[0].url.path == "/api/clients"
        assert page.data == [{"id": 1}]
        assert page.pagination.total_pages == 2

    @pytest.mark.asyncio
    async def test_headers(self):
        transport, seen = make_transport(_json(200, {"data": {"id": 1}}), token="abc")
        await transport.fetch_by_id(1)
        assert seen[0].headers["Authorization"] == "Bearer abc"
        assert seen[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_token_provider_wins(self):
        transport, seen = make_transport(
            _json(200, {"data": {"id": 1}}), token="static", token_provider=lambda: "fresh"
        )
        await transport.fetch_by_id(1)
        assert seen[0].headers["Authorization"] == "Bearer fresh"

    @pytest.mark.asyncio
    async def test_no_token_no_header(self):
        transport, seen = make_transport(_json(200, {"data": {"id": 1}}))
        await transport.fetch_by_id(1)
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_create_and_update_unwrap_data(self):
        transport, seen = make_transport(
            _json(201, {"data": {"id": 7, "goals": "Run"}, "message": "Client created successfully"})
        )
        created = await transport.create({"userId": 3, "goals": "Run"})
        assert created == {"id": 7, "goals": "Run"}
        assert seen[0].method == "POST"

        updated = await transport.update(7, {"goals": "Run"})
        assert updated["id"] == 7
        assert seen[1].method == "PUT"
        assert seen[1].url.path == "/api/clients/7"

    @pytest.mark.asyncio
    async def test_delete_no_content(self):
        transport, seen = make_transport(lambda request: httpx.Response(204))
        result = await transport.delete(4)
        assert result.success is True
        assert seen[0].method == "DELETE"

    @pytest.mark.asyncio
    async def test_bulk_calls(self):
        def handler(request):
            if request.url.path.endswith("/bulk-delete"):
                return httpx.Response(200, json={"success": True, "deleted": 2, "message": "2 deleted"})
            return httpx.Response(200, json={"data": [{"id": 1}, {"id": 2}], "updated": 2})

        transport, seen = make_transport(handler)
        deleted = await transport.delete_many([1, 2])
        updated = await transport.update_many([1, 2], {"isActive": False})

        assert deleted.deleted == 2
        assert [i["id"] for i in updated] == [1, 2]
        assert json.loads(seen[1].content) == {"ids": [1, 2], "data": {"isActive": False}}

    @pytest.mark.asyncio
    async def test_not_found(self):
        transport, _ = make_transport(lambda request: httpx.Response(404))
        with pytest.raises(NotFoundTransportError) as exc_info:
            await transport.fetch_by_id(99)
        assert exc_info.value.status == 404
        assert exc_info.value.message == "HTTP 404: Not Found"

    @pytest.mark.asyncio
    async def test_error_status(self):
        transport, _ = make_transport(_json(409, {"error": "Email or Firebase UID already exists"}))
        with pytest.raises(TransportError) as exc_info:
            await transport.create({})
        assert not isinstance(exc_info.value, NotFoundTransportError)
        assert exc_info.value.status == 409
        assert str(exc_info.value) == "Email or Firebase UID already exists"

    @pytest.mark.asyncio
    async def test_network_error_has_no_status(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport, _ = make_transport(handler)
        with pytest.raises(TransportError) as exc_info:
            await transport.fetch_all()
        assert exc_info.value.status is None
        assert "connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self):
        transport, _ = make_transport(_json(200, {"data": []}))
        await transport.close()
        assert not transport.config.client.is_closed

    @pytest.mark.asyncio
    async def test_owned_client_is_created_lazily(self):
        transport = CRUDTransport("trainers", TransportConfig(base_url="http://api.test/api/"))
        assert transport.url == "http://api.test/api/trainers"
        client = await transport._get_client()
        assert await transport._get_client() is client
        await transport.close()
        assert client.is_closed


class TestNotifications:

    @pytest.mark.asyncio
    async def test_success_message(self):
        successes, errors = [], []
        transport, _ = make_transport(_json(201, {"data": {"id": 1}}))
        notifying = NotifyingTransport(
            transport, Notifier(successes.append, errors.append), EntityMessages("Client")
        )

        await notifying.create({"userId": 1})

        assert successes == ["Client created successfully"]
        assert errors == []

    @pytest.mark.asyncio
    async def test_error_message_and_reraise(self):
        successes, errors = [], []
        transport, _ = make_transport(_json(400, {"error": "bad"}))
        notifying = NotifyingTransport(
            transport, Notifier(successes.append, errors.append), EntityMessages("Trainer")
        )

        with pytest.raises(TransportError):
            await notifying.delete(3)

        assert errors == ["Failed to delete trainer"]
        assert successes == []

    @pytest.mark.asyncio
    async def test_reads_pass_through_silently(self):
        successes = []
        transport, _ = make_transport(_json(200, {"data": [{"id": 1}]}))
        notifying = NotifyingTransport(
            transport, Notifier(on_success=successes.append), EntityMessages("Client")
        )

        page = await notifying.fetch_all()

        assert page.data == [{"id": 1}]
        assert successes == []
        assert notifying.endpoint == "/clients"

    @pytest.mark.asyncio
    async def test_override_and_exception_text(self):
        errors = []
        messages = EntityMessages(
            "Feedback", {"update": OperationMessages(success="Saved", error=None)}
        )

        async def failing():
            raise RuntimeError("rating out of range")

        with pytest.raises(RuntimeError):
            await with_notifications(
                failing(), Notifier(on_error=errors.append), messages.for_operation("update")
            )
        assert errors == ["rating out of range"]

    def test_default_messages(self):
        messages = EntityMessages("Meal plan").for_operation("update")
        assert messages.success == "Meal plan updated successfully"
        assert messages.error == "Failed to update meal plan"
