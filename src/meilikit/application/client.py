from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

import httpx

from meilikit.application.indexes import DEFAULT_BATCH_SIZE, Index
from meilikit.application.keys import KeyClient
from meilikit.application.tasks import TaskClient
from meilikit.application.tokens import SearchRules, generate_tenant_token
from meilikit.domain.exceptions import ApiError, ErrorCode, TransportError
from meilikit.domain.models.enqueued_task import EnqueuedTask
from meilikit.domain.models.index import (
    IndexesQuery,
    IndexesResults,
    IndexObject,
    IndexOptions,
    IndexSwap,
)
from meilikit.domain.models.keys import Key, KeyCreation, KeysQuery, KeysResults, KeyUpdate
from meilikit.domain.models.search import MultiSearchQuery, MultiSearchResponse
from meilikit.domain.models.server import Health, Stats, Version
from meilikit.domain.models.task import Task, TasksResults
from meilikit.domain.models.tasks_query import CancelTasksQuery, DeleteTasksQuery, TasksQuery
from meilikit.domain.models.wait_options import WaitOptions
from meilikit.infrastructure.http.client import HttpRequests
from meilikit.setup.client_config import ClientSettings, get_client_settings


class Client:
    """Entry point bundling index handles, tasks, keys and server endpoints."""

    def __init__(
        self,
        host: str,
        api_key: str | None = None,
        *,
        timeout: float | None = None,
        client_agents: Sequence[str] = (),
        wait_options: WaitOptions | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.host = host
        self.api_key = api_key
        self.http = HttpRequests(
            host,
            api_key,
            timeout=timeout,
            client_agents=client_agents,
            transport=transport,
        )
        self.tasks = TaskClient(self.http, wait_options)
        self.keys = KeyClient(self.http)
        self._batch_size = batch_size

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Client:
        if settings is None:
            settings = get_client_settings()
        return cls(
            settings.MEILI_HOST,
            settings.MEILI_API_KEY,
            timeout=settings.MEILI_TIMEOUT_SECONDS,
            client_agents=settings.MEILI_CLIENT_AGENTS,
            wait_options=WaitOptions(
                timeout_ms=settings.WAIT_TIMEOUT_MS,
                interval_ms=settings.WAIT_INTERVAL_MS,
            ),
            batch_size=settings.DOCUMENTS_BATCH_SIZE,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # Indexes

    def index(self, uid: str, primary_key: str | None = None) -> Index:
        """Return a local handle without contacting the server."""
        return Index(
            uid,
            primary_key,
            http=self.http,
            tasks=self.tasks,
            batch_size=self._batch_size,
        )

    async def get_index(self, uid: str) -> Index:
        return await self.index(uid).fetch_info()

    async def get_raw_index(self, uid: str) -> IndexObject:
        return IndexObject.model_validate(await self.http.get(f"indexes/{uid}"))

    async def get_raw_indexes(self, query: IndexesQuery | None = None) -> IndexesResults[IndexObject]:
        params = query.to_payload() if query is not None else None
        return IndexesResults[IndexObject].model_validate(await self.http.get("indexes", params))

    async def get_indexes(self, query: IndexesQuery | None = None) -> IndexesResults[Index]:
        raw = await self.get_raw_indexes(query)
        handles = [
            Index(
                info.uid,
                info.primary_key,
                http=self.http,
                tasks=self.tasks,
                batch_size=self._batch_size,
                created_at=info.created_at,
                updated_at=info.updated_at,
            )
            for info in raw.results
        ]
        return IndexesResults[Index](
            results=handles, offset=raw.offset, limit=raw.limit, total=raw.total
        )

    async def create_index(self, uid: str, primary_key: str | None = None) -> EnqueuedTask:
        options = IndexOptions(primary_key=primary_key) if primary_key else None
        return await Index.create(uid, options, self.http)

    async def update_index(self, uid: str, primary_key: str) -> EnqueuedTask:
        return await self.index(uid).update(IndexOptions(primary_key=primary_key))

    async def delete_index(self, uid: str) -> EnqueuedTask:
        return await self.index(uid).delete()

    async def delete_index_if_exists(self, uid: str) -> bool:
        """Delete ``uid`` and wait for it; return ``False`` when the index did not exist."""
        try:
            enqueued = await self.delete_index(uid)
            task = await self.tasks.wait_for_task(enqueued.task_uid)
        except ApiError as exc:
            if exc.code == ErrorCode.INDEX_NOT_FOUND:
                return False
            raise
        if task.error is not None and task.error.code == ErrorCode.INDEX_NOT_FOUND:
            return False
        return True

    async def swap_indexes(self, pairs: Sequence[tuple[str, str]]) -> EnqueuedTask:
        body = [IndexSwap(indexes=pair).to_payload() for pair in pairs]
        return EnqueuedTask.model_validate(await self.http.post("swap-indexes", body))

    async def multi_search(
        self, queries: Sequence[MultiSearchQuery | Mapping[str, Any]]
    ) -> MultiSearchResponse:
        payload = []
        for query in queries:
            if not isinstance(query, MultiSearchQuery):
                query = MultiSearchQuery.model_validate(query)
            payload.append(query.to_payload())
        raw = await self.http.post("multi-search", {"queries": payload})
        return MultiSearchResponse.model_validate(raw)

    # Tasks

    async def get_task(self, uid: int) -> Task:
        return await self.tasks.get_task(uid)

    async def get_tasks(self, query: TasksQuery | None = None) -> TasksResults:
        return await self.tasks.get_tasks(query)

    async def cancel_tasks(self, query: CancelTasksQuery | None = None) -> EnqueuedTask:
        return await self.tasks.cancel_tasks(query)

    async def delete_tasks(self, query: DeleteTasksQuery | None = None) -> EnqueuedTask:
        return await self.tasks.delete_tasks(query)

    async def wait_for_task(self, uid: int, options: WaitOptions | None = None) -> Task:
        return await self.tasks.wait_for_task(uid, options)

    async def wait_for_tasks(
        self, uids: Sequence[int], options: WaitOptions | None = None
    ) -> list[Task]:
        return await self.tasks.wait_for_tasks(uids, options)

    # Keys

    async def get_keys(self, query: KeysQuery | None = None) -> KeysResults:
        return await self.keys.get_keys(query)

    async def get_key(self, key_or_uid: str) -> Key:
        return await self.keys.get_key(key_or_uid)

    async def create_key(self, options: KeyCreation | Mapping[str, Any]) -> Key:
        return await self.keys.create_key(options)

    async def update_key(self, key_or_uid: str, options: KeyUpdate | Mapping[str, Any]) -> Key:
        return await self.keys.update_key(key_or_uid, options)

    async def delete_key(self, key_or_uid: str) -> None:
        await self.keys.delete_key(key_or_uid)

    # Server

    async def health(self) -> Health:
        return Health.model_validate(await self.http.get("health"))

    async def is_healthy(self) -> bool:
        """Return ``True`` when the server answers ``available``; any error means unhealthy."""
        try:
            return (await self.health()).status == "available"
        except (ApiError, TransportError):
            return False

    async def get_stats(self) -> Stats:
        return Stats.model_validate(await self.http.get("stats"))

    async def get_version(self) -> Version:
        return Version.model_validate(await self.http.get("version"))

    async def create_dump(self) -> EnqueuedTask:
        return EnqueuedTask.model_validate(await self.http.post("dumps"))

    def generate_tenant_token(
        self,
        api_key_uid: str,
        search_rules: SearchRules,
        *,
        api_key: str | None = None,
        expires_at: datetime | None = None,
    ) -> str:
        """Sign a tenant token with ``api_key``, defaulting to the client's own key."""
        return generate_tenant_token(
            api_key_uid, search_rules, api_key or self.api_key, expires_at
        )
