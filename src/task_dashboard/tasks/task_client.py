# src/task_dashboard/tasks/task_client.py

"""
HTTP transport for the remote task collection.

Maps the four logical operations onto a generic REST record store:

    list    GET    /tasks
    create  POST   /tasks
    update  PATCH  /tasks/:id
    delete  DELETE /tasks/:id

One attempt per call, no retries and no timeouts. Whatever goes wrong
(non-2xx, network error, undecodable body) surfaces as RequestFailed; the
caller decides what to do with it.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .task_models import Task, TaskId

logger = logging.getLogger(__name__)


class RequestFailed(Exception):
    """A call to the task store did not succeed."""

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _raise_for_response(response: httpx.Response, default_message: str) -> None:
    if response.is_success:
        return
    body = response.text.strip()
    raise RequestFailed(body or default_message, status_code=response.status_code)


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise RequestFailed(
            f"Invalid JSON from {response.request.method} {response.request.url}",
            status_code=response.status_code,
        ) from e


def _decode_task(data: Any) -> Task:
    try:
        return Task.from_wire(data)
    except ValueError as e:
        raise RequestFailed(f"Malformed task record: {e}") from e


class TaskClient:
    """
    Async client for the task collection.

    `transport` is passed straight to httpx.AsyncClient; tests inject an
    httpx.MockTransport there.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._endpoint = f"{base_url.rstrip('/')}/tasks"
        self._http = httpx.AsyncClient(
            transport=transport,
            headers=headers,
            timeout=None,
        )
        logger.info("TaskClient ready endpoint=%s", self._endpoint)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _item_url(self, task_id: TaskId) -> str:
        return f"{self._endpoint}/{task_id}"

    async def _send(self, method: str, url: str, *, json: Any = None) -> httpx.Response:
        try:
            return await self._http.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise RequestFailed(f"{method} {url} failed: {e}") from e

    async def list(self) -> list[Task]:
        response = await self._send("GET", self._endpoint)
        _raise_for_response(response, "Request failed")

        data = _decode_json(response)
        if not isinstance(data, list):
            raise RequestFailed("Expected a JSON array of tasks", status_code=response.status_code)
        tasks = [_decode_task(item) for item in data]
        logger.debug("Fetched %d tasks", len(tasks))
        return tasks

    async def create(self, payload: dict[str, Any]) -> Task:
        body = {k: v for k, v in payload.items() if k != "id"}
        response = await self._send("POST", self._endpoint, json=body)
        _raise_for_response(response, "Request failed")

        task = _decode_task(_decode_json(response))
        logger.debug("Created task id=%s", task.id)
        return task

    async def update(self, task_id: TaskId, patch: dict[str, Any]) -> Task:
        response = await self._send("PATCH", self._item_url(task_id), json=patch)
        _raise_for_response(response, "Request failed")

        task = _decode_task(_decode_json(response))
        logger.debug("Updated task id=%s fields=%s", task_id, sorted(patch))
        return task

    async def delete(self, task_id: TaskId) -> bool:
        response = await self._send("DELETE", self._item_url(task_id))
        _raise_for_response(response, "Failed to delete task")
        logger.debug("Deleted task id=%s", task_id)
        return True

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> TaskClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
