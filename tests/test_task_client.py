# tests/test_task_client.py

from __future__ import annotations

import json

import httpx
import pytest

from task_dashboard.tasks.task_client import RequestFailed, TaskClient
from task_dashboard.tasks.task_models import TaskStatus


class RecordingStore:
    """httpx.MockTransport handler that records requests and replies with canned responses."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def _client(handler) -> TaskClient:
    return TaskClient("http://store.test/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_list_decodes_tasks_in_store_order() -> None:
    store = RecordingStore(
        httpx.Response(
            200,
            json=[
                {"id": 2, "title": "B", "description": "", "status": "completed", "priority": "high"},
                {"id": "a1", "title": "A", "description": "d", "status": "pending", "priority": "low",
                 "createdAt": "2024-01-01T00:00:00.000Z", "owner": "me"},
            ],
        )
    )
    async with _client(store) as client:
        tasks = await client.list()

    assert [t.id for t in tasks] == [2, "a1"]
    assert tasks[0].status == TaskStatus.COMPLETED
    assert tasks[1].created_at == "2024-01-01T00:00:00.000Z"
    assert tasks[1].extra == {"owner": "me"}

    req = store.requests[0]
    assert req.method == "GET"
    assert str(req.url) == "http://store.test/tasks"


@pytest.mark.asyncio
async def test_create_posts_json_without_id_and_returns_server_record() -> None:
    store = RecordingStore(
        httpx.Response(201, json={"id": 7, "title": "X", "description": "Y", "status": "pending", "priority": "low"})
    )
    async with _client(store) as client:
        task = await client.create({"id": 99, "title": "X", "description": "Y", "status": "pending", "priority": "low"})

    assert task.id == 7
    req = store.requests[0]
    assert req.method == "POST"
    assert req.headers["content-type"] == "application/json"
    assert "id" not in json.loads(req.content)


@pytest.mark.asyncio
async def test_update_patches_item_url() -> None:
    store = RecordingStore(
        httpx.Response(200, json={"id": 3, "title": "T", "description": "", "status": "completed", "priority": "low"})
    )
    async with _client(store) as client:
        task = await client.update(3, {"status": "completed"})

    assert task.status == TaskStatus.COMPLETED
    req = store.requests[0]
    assert req.method == "PATCH"
    assert str(req.url) == "http://store.test/tasks/3"
    assert json.loads(req.content) == {"status": "completed"}


@pytest.mark.asyncio
async def test_delete_ignores_body_and_returns_true() -> None:
    store = RecordingStore(httpx.Response(204))
    async with _client(store) as client:
        assert await client.delete("abc") is True

    assert store.requests[0].method == "DELETE"
    assert str(store.requests[0].url) == "http://store.test/tasks/abc"


@pytest.mark.asyncio
async def test_non_2xx_raises_with_body_text() -> None:
    store = RecordingStore(httpx.Response(500, text="store is on fire"))
    async with _client(store) as client:
        with pytest.raises(RequestFailed) as exc_info:
            await client.create({"title": "X"})

    assert exc_info.value.detail == "store is on fire"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_non_2xx_without_body_uses_default_message() -> None:
    async with _client(RecordingStore(httpx.Response(404))) as client:
        with pytest.raises(RequestFailed, match="Request failed"):
            await client.list()

    async with _client(RecordingStore(httpx.Response(404))) as client:
        with pytest.raises(RequestFailed, match="Failed to delete task"):
            await client.delete(1)


@pytest.mark.asyncio
async def test_network_error_becomes_request_failed() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(refuse) as client:
        with pytest.raises(RequestFailed, match="connection refused"):
            await client.list()


@pytest.mark.asyncio
async def test_single_attempt_per_call() -> None:
    store = RecordingStore(httpx.Response(503, text="busy"))
    async with _client(store) as client:
        with pytest.raises(RequestFailed):
            await client.update(1, {"title": "x"})

    assert len(store.requests) == 1


@pytest.mark.asyncio
async def test_bad_payloads_raise_request_failed() -> None:
    async with _client(RecordingStore(httpx.Response(200, text="<html>"))) as client:
        with pytest.raises(RequestFailed, match="Invalid JSON"):
            await client.list()

    async with _client(RecordingStore(httpx.Response(200, json={"not": "a list"}))) as client:
        with pytest.raises(RequestFailed, match="JSON array"):
            await client.list()

    async with _client(RecordingStore(httpx.Response(201, json={"title": "no id"}))) as client:
        with pytest.raises(RequestFailed, match="no id"):
            await client.create({"title": "no id"})


def test_endpoint_joins_base_url() -> None:
    client = TaskClient("http://localhost:3001/")
    assert client.endpoint == "http://localhost:3001/tasks"
