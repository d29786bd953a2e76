"""
Tests for the dashboard controller and store.

The transport is replaced by AsyncMock methods so each test controls
exactly what the API "returns".
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from dashboard.controller import CRUDController, CRUDHooks
from dashboard.entity import ApiResponse, DeleteResponse, FetchParams, Pagination, ValidationResult
from dashboard.store import CRUDStore
from dashboard.transport import NotFoundTransportError, TransportError
from dashboard.validation import validate_client


def page_of(*items, total=None, page=1, limit=10):
    total = len(items) if total is None else total
    return ApiResponse(
        data=list(items),
        pagination=Pagination(page=page, limit=limit, total=total, total_pages=1),
    )


def fake_transport():
    transport = MagicMock()
    transport.fetch_all = AsyncMock(return_value=page_of())
    transport.create = AsyncMock()
    transport.update = AsyncMock()
    transport.delete = AsyncMock(return_value=DeleteResponse(success=True))
    return transport


# =============================================================================
# Controller
# =============================================================================


class TestController:

    @pytest.mark.asyncio
    async def test_load_replaces_items_and_pagination(self):
        transport = fake_transport()
        transport.fetch_all.return_value = page_of({"id": 1}, {"id": 2}, total=12, page=2, limit=2)
        controller = CRUDController(transport)

        result = await controller.load(FetchParams(page=2, limit=2))

        assert result.success
        assert controller.state.items == [{"id": 1}, {"id": 2}]
        assert controller.state.pagination.total == 12
        assert controller.state.pagination.page == 2
        assert controller.state.loading is False

    @pytest.mark.asyncio
    async def test_create_prepends(self):
        transport = fake_transport()
        transport.create.return_value = {"id": 3}
        controller = CRUDController(transport)
        controller.state.items = [{"id": 1}]

        await controller.create({"userId": 9})

        assert controller.state.items == [{"id": 3}, {"id": 1}]

    @pytest.mark.asyncio
    async def test_update_replaces_item_and_selection(self):
        transport = fake_transport()
        transport.update.return_value = {"id": 2, "goals": "new"}
        controller = CRUDController(transport)
        controller.state.items = [{"id": 1}, {"id": 2, "goals": "old"}]
        controller.select({"id": 2, "goals": "old"})

        await controller.update(2, {"goals": "new"})

        assert controller.state.items[1] == {"id": 2, "goals": "new"}
        assert controller.state.selected_item == {"id": 2, "goals": "new"}

    @pytest.mark.asyncio
    async def test_delete_removes_item_and_clears_selection(self):
        controller = CRUDController(fake_transport())
        controller.state.items = [{"id": 1}, {"id": 2}]
        controller.select({"id": 2})

        result = await controller.delete(2)

        assert result.success
        assert controller.state.items == [{"id": 1}]
        assert controller.state.selected_item is None

    @pytest.mark.asyncio
    async def test_failure_keeps_items(self):
        transport = fake_transport()
        transport.update.side_effect = NotFoundTransportError("HTTP 404: Not Found", 404)
        controller = CRUDController(transport)
        controller.state.items = [{"id": 1}]

        result = await controller.update(1, {"goals": "x"})

        assert not result.success
        assert controller.state.error == "HTTP 404: Not Found"
        assert controller.state.items == [{"id": 1}]
        assert controller.state.loading is False

    @pytest.mark.asyncio
    async def test_failure_without_message_uses_fallback(self):
        transport = fake_transport()
        transport.delete.side_effect = RuntimeError()
        controller = CRUDController(transport)

        result = await controller.delete(1)

        assert result.error == "Failed to delete item"

    @pytest.mark.asyncio
    async def test_validation_blocks_transport(self):
        transport = fake_transport()
        controller = CRUDController(
            transport, CRUDHooks(validate=lambda data, op: validate_client(data, op))
        )

        result = await controller.create({"weight": 900})

        assert not result.success
        assert controller.state.error == "User is required, Weight must be between 20 and 500"
        transport.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_hooks_run_in_order(self):
        calls = []
        transport = fake_transport()
        transport.create.side_effect = lambda data: {"id": 5, **data}

        async def validate(data, op):
            calls.append("validate")
            return ValidationResult(is_valid=True)

        def preprocess(data, op):
            calls.append("preprocess")
            return {**data, "goals": data["goals"].strip()}

        def postprocess(item, op):
            calls.append("postprocess")
            return {**item, "label": item["goals"].upper()}

        async def on_success(item, op):
            calls.append(f"success:{op}")

        controller = CRUDController(
            transport,
            CRUDHooks(validate=validate, preprocess=preprocess, postprocess=postprocess, on_success=on_success),
        )
        result = await controller.create({"goals": "  run  "})

        assert calls == ["validate", "preprocess", "postprocess", "success:create"]
        transport.create.assert_awaited_once_with({"goals": "run"})
        assert result.data == {"id": 5, "goals": "run", "label": "RUN"}
        assert controller.state.items == [result.data]

    @pytest.mark.asyncio
    async def test_list_postprocess_receives_items(self):
        transport = fake_transport()
        transport.fetch_all.return_value = page_of({"id": 1}, {"id": 2})
        controller = CRUDController(
            transport, CRUDHooks(postprocess=lambda items, op: [i for i in items if i["id"] > 1])
        )

        await controller.load()

        assert controller.state.items == [{"id": 2}]


# =============================================================================
# Store
# =============================================================================


class TestStore:

    @pytest.mark.asyncio
    async def test_mount_fetches_and_notifies(self):
        transport = fake_transport()
        transport.fetch_all.return_value = page_of({"id": 1})
        store = CRUDStore(transport)
        snapshots = []
        store.subscribe(lambda state: snapshots.append(state.loading))

        await store.mount()

        assert store.state.items == [{"id": 1}]
        assert snapshots[0] is True
        assert snapshots[-1] is False

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        store = CRUDStore(fake_transport())
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()

        await store.refresh()

        assert seen == []

    @pytest.mark.asyncio
    async def test_params_merge_order(self):
        transport = fake_transport()
        store = CRUDStore(transport, FetchParams(limit=25, sort_by="name", filters={"role": "CLIENT"}))
        store.state.search_query = "ann"

        await store.fetch_items(FetchParams(sort_order="asc", filters={"role": "TRAINER"}))

        params = transport.fetch_all.await_args.args[0]
        assert params.page == 1
        assert params.limit == 10
        assert params.search == "ann"
        assert params.sort_by == "name"
        assert params.sort_order == "asc"
        assert params.filters == {"role": "TRAINER"}

    @pytest.mark.asyncio
    async def test_filters_reset_page_and_refetch_when_mounted(self):
        transport = fake_transport()
        store = CRUDStore(transport)
        await store.set_page(3)
        transport.fetch_all.assert_not_called()

        await store.mount()
        await store.set_page(3)
        await store.set_filters({"trainerId": 2})

        assert store.state.pagination.page == 1
        params = transport.fetch_all.await_args.args[0]
        assert params.page == 1
        assert params.filters == {"trainerId": 2}

    @pytest.mark.asyncio
    async def test_search_resets_page(self):
        store = CRUDStore(fake_transport())
        await store.set_page(4)
        await store.set_search_query("emma")
        assert store.state.pagination.page == 1
        assert store.state.search_query == "emma"

    @pytest.mark.asyncio
    async def test_stale_fetch_is_discarded(self):
        transport = fake_transport()
        release_first = asyncio.Event()

        async def fetch_all(params):
            if params.search == "slow":
                await release_first.wait()
                return page_of({"id": "stale"})
            return page_of({"id": "fresh"})

        transport.fetch_all.side_effect = fetch_all
        store = CRUDStore(transport)

        slow = asyncio.create_task(store.fetch_items(FetchParams(search="slow")))
        await asyncio.sleep(0)
        await store.fetch_items(FetchParams(search="fast"))
        release_first.set()
        await slow

        assert store.state.items == [{"id": "fresh"}]
        assert store.state.loading is False

    @pytest.mark.asyncio
    async def test_stale_error_is_discarded(self):
        transport = fake_transport()
        release_first = asyncio.Event()

        async def fetch_all(params):
            if params.search == "slow":
                await release_first.wait()
                raise TransportError("boom", 500)
            return page_of({"id": 1})

        transport.fetch_all.side_effect = fetch_all
        store = CRUDStore(transport)

        slow = asyncio.create_task(store.fetch_items(FetchParams(search="slow")))
        await asyncio.sleep(0)
        await store.fetch_items()
        release_first.set()
        await slow

        assert store.state.error is None

    @pytest.mark.asyncio
    async def test_fetch_error(self):
        transport = fake_transport()
        transport.fetch_all.side_effect = TransportError("HTTP 500: Internal Server Error", 500)
        store = CRUDStore(transport)

        await store.fetch_items()

        assert store.state.error == "HTTP 500: Internal Server Error"
        assert store.state.loading is False

    @pytest.mark.asyncio
    async def test_mutations(self):
        transport = fake_transport()
        transport.create.return_value = {"id": 2}
        transport.update.return_value = {"id": 2, "name": "B"}
        store = CRUDStore(transport)
        store.state.items = [{"id": 1}]

        assert await store.create_item({"name": "A"}) is True
        assert store.state.items == [{"id": 2}, {"id": 1}]

        store.set_selected_item({"id": 2})
        assert await store.update_item(2, {"name": "B"}) is True
        assert store.state.selected_item == {"id": 2, "name": "B"}

        assert await store.delete_item(2) is True
        assert store.state.items == [{"id": 1}]
        assert store.state.selected_item is None

    @pytest.mark.asyncio
    async def test_mutation_failure(self):
        transport = fake_transport()
        transport.create.side_effect = RuntimeError()
        store = CRUDStore(transport)

        assert await store.create_item({}) is False
        assert store.state.error == "Failed to create item"
        assert store.state.loading is False

    @pytest.mark.asyncio
    async def test_cancelled_fetch_clears_loading(self):
        transport = fake_transport()
        never = asyncio.Event()

        async def fetch_all(params):
            await never.wait()

        transport.fetch_all.side_effect = fetch_all
        store = CRUDStore(transport)

        task = asyncio.create_task(store.fetch_items())
        await asyncio.sleep(0)
        assert store.state.loading is True
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert store.state.loading is False
        assert store.state.error is None

    @pytest.mark.asyncio
    async def test_cancelled_mutation_clears_loading(self):
        transport = fake_transport()
        never = asyncio.Event()

        async def update(item_id, data):
            await never.wait()

        transport.update.side_effect = update
        store = CRUDStore(transport)
        store.state.items = [{"id": 1}]

        task = asyncio.create_task(store.update_item(1, {"name": "B"}))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert store.state.loading is False
        assert store.state.items == [{"id": 1}]
