from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from meilikit.application import tasks as tasks_module
from meilikit.infrastructure.http.client import NO_BODY

ENQUEUED_AT = "2023-01-05T10:21:03.123456789Z"


def task_payload(uid: int, status: str = "succeeded", **extra: Any) -> dict[str, Any]:
    payload = {
        "uid": uid,
        "indexUid": "movies",
        "status": status,
        "type": "documentAdditionOrUpdate",
        "details": {"receivedDocuments": 1, "indexedDocuments": 1},
        "error": None,
        "duration": "PT0.001S",
        "enqueuedAt": ENQUEUED_AT,
        "startedAt": ENQUEUED_AT,
        "finishedAt": ENQUEUED_AT,
    }
    payload.update(extra)
    return payload


def enqueued_payload(task_uid: int, task_type: str = "documentAdditionOrUpdate") -> dict[str, Any]:
    return {
        "taskUid": task_uid,
        "indexUid": "movies",
        "status": "enqueued",
        "type": task_type,
        "enqueuedAt": ENQUEUED_AT,
    }


@dataclass
class Call:
    method: str
    path: str
    params: Mapping[str, Any] | None
    body: Any
    headers: Mapping[str, str] | None


Responder = Callable[[Call], Any]


class StubHttp:
    """In-memory HttpTransport replacement that records every call."""

    def __init__(self, responder: Responder | None = None) -> None:
        self.calls: list[Call] = []
        self._responder = responder or self._default_response
        self._next_task_uid = 0

    def _default_response(self, call: Call) -> Any:
        if call.method == "GET":
            return {}
        self._next_task_uid += 1
        return enqueued_payload(self._next_task_uid)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = NO_BODY,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        call = Call(method, path, params, body, headers)
        self.calls.append(call)
        return self._responder(call)

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path, body=NO_BODY, params=None, headers=None) -> Any:
        return await self.request("POST", path, params=params, body=body, headers=headers)

    async def put(self, path, body=NO_BODY, params=None, headers=None) -> Any:
        return await self.request("PUT", path, params=params, body=body, headers=headers)

    async def patch(self, path, body=NO_BODY) -> Any:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path, params=None) -> Any:
        return await self.request("DELETE", path, params=params)


class TaskScript:
    """Responder replaying a status sequence per task uid; the last status repeats."""

    def __init__(self, statuses: Mapping[int, list[str]]) -> None:
        self._statuses = {uid: list(seq) for uid, seq in statuses.items()}
        self.polls: dict[int, int] = {uid: 0 for uid in statuses}

    def __call__(self, call: Call) -> Any:
        uid = int(call.path.rsplit("/", 1)[-1])
        sequence = self._statuses[uid]
        status = sequence.pop(0) if len(sequence) > 1 else sequence[0]
        self.polls[uid] += 1
        return task_payload(uid, status)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Drive the wait loop with virtual time instead of real sleeps."""
    clock = FakeClock()
    monkeypatch.setattr(tasks_module, "time", SimpleNamespace(monotonic=clock.monotonic))
    monkeypatch.setattr(tasks_module, "asyncio", SimpleNamespace(sleep=clock.sleep))
    return clock


class FakeServer:
    """Minimal search server behind ``httpx.MockTransport``.

    Mutations are applied immediately and their tasks report ``succeeded``.
    """

    DEFAULT_SETTINGS: dict[str, Any] = {
        "stop-words": [],
        "synonyms": {},
        "ranking-rules": ["words", "typo", "proximity", "attribute", "sort", "exactness"],
        "distinct-attribute": None,
        "filterable-attributes": [],
        "sortable-attributes": [],
        "searchable-attributes": ["*"],
        "displayed-attributes": ["*"],
        "typo-tolerance": {"enabled": True, "disableOnAttributes": [], "disableOnWords": []},
        "faceting": {"maxValuesPerFacet": 100},
        "pagination": {"maxTotalHits": 1000},
    }

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.settings: dict[str, Any] = json.loads(json.dumps(self.DEFAULT_SETTINGS))
        self.tasks: dict[int, dict[str, Any]] = {}
        self.indexes: dict[str, dict[str, Any]] = {
            "movies": {
                "uid": "movies",
                "primaryKey": "id",
                "createdAt": "2023-01-01T00:00:00.000000001Z",
                "updatedAt": "2023-01-02T00:00:00Z",
            }
        }

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def _enqueue(self, task_type: str) -> httpx.Response:
        uid = len(self.tasks)
        self.tasks[uid] = task_payload(uid, "succeeded", type=task_type)
        return httpx.Response(202, json=enqueued_payload(uid, task_type))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        if parts[0] == "tasks" and len(parts) == 2:
            task = self.tasks.get(int(parts[1]))
            if task is None:
                return httpx.Response(
                    404,
                    json={
                        "message": f"Task `{parts[1]}` not found.",
                        "code": "task_not_found",
                        "type": "invalid_request",
                        "link": "https://docs.meilisearch.com/errors#task_not_found",
                    },
                )
            return httpx.Response(200, json=task)
        if parts[0] == "indexes" and len(parts) == 2:
            index = self.indexes.get(parts[1])
            if index is None:
                return httpx.Response(
                    404,
                    json={
                        "message": f"Index `{parts[1]}` not found.",
                        "code": "index_not_found",
                        "type": "invalid_request",
                        "link": "https://docs.meilisearch.com/errors#index_not_found",
                    },
                )
            if request.method == "DELETE":
                del self.indexes[parts[1]]
                return self._enqueue("indexDeletion")
            return httpx.Response(200, json=index)
        if parts[0] == "indexes" and len(parts) == 4 and parts[2] == "settings":
            segment = parts[3]
            if request.method == "GET":
                return httpx.Response(200, json=self.settings[segment])
            if request.method == "DELETE":
                self.settings[segment] = json.loads(json.dumps(self.DEFAULT_SETTINGS[segment]))
            elif request.method == "PUT":
                self.settings[segment] = json.loads(request.content)
            elif request.method == "PATCH":
                self.settings[segment].update(json.loads(request.content))
            return self._enqueue("settingsUpdate")
        return httpx.Response(404, json={"message": "Not found", "code": "bad_request", "type": "invalid_request", "link": ""})


@pytest.fixture
def fake_server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def env_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide environment variables for ClientSettings."""
    monkeypatch.setenv("MEILI_HOST", "search.local:7700")
    monkeypatch.setenv("MEILI_API_KEY", "masterKey")
    monkeypatch.setenv("WAIT_TIMEOUT_MS", "200")
    monkeypatch.setenv("WAIT_INTERVAL_MS", "20")
    monkeypatch.setenv("DOCUMENTS_BATCH_SIZE", "2")
