from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from datetime import datetime
from typing import Any, cast

import inject

from meilikit.application.settings import SettingsRegistry
from meilikit.application.tasks import TaskClient
from meilikit.domain.exceptions import ClientValidationError
from meilikit.domain.models.documents import ContentType, Document, DocumentsQuery, ResourceResults
from meilikit.domain.models.enqueued_task import EnqueuedTask
from meilikit.domain.models.index import IndexObject, IndexOptions, IndexStats
from meilikit.domain.models.search import SearchParams, SearchResponse
from meilikit.domain.models.settings import Faceting, PaginationSettings, Settings, TypoTolerance
from meilikit.domain.models.task import Task, TasksResults
from meilikit.domain.models.tasks_query import TasksQuery
from meilikit.domain.models.wait_options import WaitOptions
from meilikit.domain.repositories import HttpTransport

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000

_settings_registry = SettingsRegistry()


def _as_search_params(params: SearchParams | Mapping[str, Any] | None) -> SearchParams:
    if params is None:
        return SearchParams()
    if isinstance(params, SearchParams):
        return params
    return SearchParams.model_validate(params)


def _chunks(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    if size <= 0:
        raise ClientValidationError(f"Batch size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start : start + size]


class Index:
    """
    Handle on one server index.

    ``primary_key``, ``created_at`` and ``updated_at`` are the last known
    snapshot. They only change when ``get_raw_info``, ``fetch_info`` or
    ``fetch_primary_key`` is awaited; concurrent refreshes are not
    synchronized and the last one to complete wins.
    """

    def __init__(
        self,
        uid: str,
        primary_key: str | None = None,
        *,
        http: HttpTransport | None = None,
        tasks: TaskClient | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        self.uid = uid
        self.primary_key = primary_key
        self.created_at = created_at
        self.updated_at = updated_at
        self._http = http or cast(HttpTransport, inject.instance(HttpTransport))
        self.tasks = tasks or TaskClient(self._http)
        self._batch_size = batch_size

    def __repr__(self) -> str:
        return f"Index(uid={self.uid!r}, primary_key={self.primary_key!r})"

    @property
    def _path(self) -> str:
        return f"indexes/{self.uid}"

    # Search

    async def search(
        self,
        query: str | None = None,
        params: SearchParams | Mapping[str, Any] | None = None,
    ) -> SearchResponse:
        """Search with POST. Array parameters and array filters are sent as JSON."""
        body = _as_search_params(params).to_payload()
        if query is not None:
            body["q"] = query
        raw = await self._http.post(f"{self._path}/search", body)
        return SearchResponse.model_validate(raw)

    async def search_get(
        self,
        query: str | None = None,
        params: SearchParams | Mapping[str, Any] | None = None,
    ) -> SearchResponse:
        """
        Search with GET.

        Array parameters (sort, facets, attributes to retrieve, crop or
        highlight) are sent comma-joined. The filter must be a string; an
        array filter raises ``ClientValidationError`` without sending
        anything.
        """
        search_params = _as_search_params(params)
        if isinstance(search_params.filter, list):
            raise ClientValidationError(
                "The filter query parameter should be in string format when using search_get"
            )
        query_params = search_params.to_payload()
        if query is not None:
            query_params["q"] = query
        raw = await self._http.get(f"{self._path}/search", query_params)
        return SearchResponse.model_validate(raw)

    # Index

    @classmethod
    async def create(
        cls,
        uid: str,
        options: IndexOptions | None = None,
        http: HttpTransport | None = None,
    ) -> EnqueuedTask:
        http = http or cast(HttpTransport, inject.instance(HttpTransport))
        body = {**(options.to_payload() if options else {}), "uid": uid}
        raw = await http.post("indexes", body)
        return EnqueuedTask.model_validate(raw)

    async def get_raw_info(self) -> IndexObject:
        """Fetch the index description and refresh the cached snapshot fields."""
        info = IndexObject.model_validate(await self._http.get(self._path))
        self.primary_key = info.primary_key
        self.created_at = info.created_at
        self.updated_at = info.updated_at
        return info

    async def fetch_info(self) -> Index:
        await self.get_raw_info()
        return self

    async def fetch_primary_key(self) -> str | None:
        return (await self.get_raw_info()).primary_key

    async def update(self, options: IndexOptions) -> EnqueuedTask:
        raw = await self._http.patch(self._path, options.to_payload())
        return EnqueuedTask.model_validate(raw)

    async def delete(self) -> EnqueuedTask:
        raw = await self._http.delete(self._path)
        return EnqueuedTask.model_validate(raw)

    # Tasks

    async def get_tasks(self, query: TasksQuery | None = None) -> TasksResults:
        query = (query or TasksQuery()).model_copy(update={"index_uids": [self.uid]})
        return await self.tasks.get_tasks(query)

    async def get_task(self, task_uid: int) -> Task:
        return await self.tasks.get_task(task_uid)

    async def wait_for_task(self, task_uid: int, options: WaitOptions | None = None) -> Task:
        return await self.tasks.wait_for_task(task_uid, options)

    async def wait_for_tasks(
        self, task_uids: Sequence[int], options: WaitOptions | None = None
    ) -> list[Task]:
        return await self.tasks.wait_for_tasks(task_uids, options)

    # Stats

    async def get_stats(self) -> IndexStats:
        return IndexStats.model_validate(await self._http.get(f"{self._path}/stats"))

    # Documents

    async def get_documents(self, query: DocumentsQuery | None = None) -> ResourceResults[Document]:
        params = query.to_payload() if query is not None else None
        raw = await self._http.get(f"{self._path}/documents", params)
        return ResourceResults[Document].model_validate(raw)

    async def get_document(
        self, document_id: str | int, fields: Sequence[str] | None = None
    ) -> Document:
        params = {"fields": list(fields)} if fields else None
        return await self._http.get(f"{self._path}/documents/{document_id}", params)

    async def add_documents(
        self, documents: Sequence[Document], primary_key: str | None = None
    ) -> EnqueuedTask:
        """Add documents, replacing any stored document with the same primary key."""
        raw = await self._http.post(
            f"{self._path}/documents", list(documents), {"primaryKey": primary_key}
        )
        return EnqueuedTask.model_validate(raw)

    async def add_documents_from_string(
        self,
        documents: str | bytes,
        content_type: ContentType | str,
        primary_key: str | None = None,
        csv_delimiter: str | None = None,
    ) -> EnqueuedTask:
        """Add documents from a raw csv, ndjson or json payload sent untouched."""
        raw = await self._http.post(
            f"{self._path}/documents",
            documents,
            {"primaryKey": primary_key, "csvDelimiter": csv_delimiter},
            {"Content-Type": str(content_type)},
        )
        return EnqueuedTask.model_validate(raw)

    async def add_documents_in_batches(
        self,
        documents: Sequence[Document],
        batch_size: int | None = None,
        primary_key: str | None = None,
    ) -> list[EnqueuedTask]:
        """
        Add documents in chunks of ``batch_size``, one request per chunk.

        Chunks are sent sequentially and the returned tasks follow chunk
        order. Each chunk is an independent server task: there is no
        atomicity across chunks, so a later chunk can fail after earlier
        ones were indexed.
        """
        enqueued = []
        size = self._batch_size if batch_size is None else batch_size
        for chunk in _chunks(documents, size):
            enqueued.append(await self.add_documents(chunk, primary_key))
        logger.debug(
            "Documents sent in batches",
            extra={"index_uid": self.uid, "batches": len(enqueued)},
        )
        return enqueued

    async def update_documents(
        self, documents: Sequence[Document], primary_key: str | None = None
    ) -> EnqueuedTask:
        """Add documents, merging fields into any stored document with the same primary key."""
        raw = await self._http.put(
            f"{self._path}/documents", list(documents), {"primaryKey": primary_key}
        )
        return EnqueuedTask.model_validate(raw)

    async def update_documents_from_string(
        self,
        documents: str | bytes,
        content_type: ContentType | str,
        primary_key: str | None = None,
        csv_delimiter: str | None = None,
    ) -> EnqueuedTask:
        raw = await self._http.put(
            f"{self._path}/documents",
            documents,
            {"primaryKey": primary_key, "csvDelimiter": csv_delimiter},
            {"Content-Type": str(content_type)},
        )
        return EnqueuedTask.model_validate(raw)

    async def update_documents_in_batches(
        self,
        documents: Sequence[Document],
        batch_size: int | None = None,
        primary_key: str | None = None,
    ) -> list[EnqueuedTask]:
        """Chunked ``update_documents`` with the same ordering and non-atomicity as adding."""
        enqueued = []
        size = self._batch_size if batch_size is None else batch_size
        for chunk in _chunks(documents, size):
            enqueued.append(await self.update_documents(chunk, primary_key))
        return enqueued

    async def delete_document(self, document_id: str | int) -> EnqueuedTask:
        raw = await self._http.delete(f"{self._path}/documents/{document_id}")
        return EnqueuedTask.model_validate(raw)

    async def delete_documents(self, document_ids: Sequence[str | int]) -> EnqueuedTask:
        raw = await self._http.post(f"{self._path}/documents/delete-batch", list(document_ids))
        return EnqueuedTask.model_validate(raw)

    async def delete_all_documents(self) -> EnqueuedTask:
        raw = await self._http.delete(f"{self._path}/documents")
        return EnqueuedTask.model_validate(raw)

    # Settings

    async def get_settings(self) -> Settings:
        return Settings.model_validate(await self._http.get(f"{self._path}/settings"))

    async def update_settings(self, settings: Settings | Mapping[str, Any]) -> EnqueuedTask:
        """Update several settings at once. Settings not provided are left unchanged."""
        if not isinstance(settings, Settings):
            settings = Settings.model_validate(settings)
        raw = await self._http.patch(f"{self._path}/settings", settings.to_payload())
        return EnqueuedTask.model_validate(raw)

    async def reset_settings(self) -> EnqueuedTask:
        raw = await self._http.delete(f"{self._path}/settings")
        return EnqueuedTask.model_validate(raw)

    async def get_setting(self, name: str) -> Any:
        route = _settings_registry.route_for(name)
        return route.parse(await self._http.get(route.path(self.uid)))

    async def update_setting(self, name: str, value: Any) -> EnqueuedTask:
        """Overwrite one setting. List values replace the stored list entirely."""
        route = _settings_registry.route_for(name)
        raw = await self._http.request(route.update_method, route.path(self.uid), body=route.dump(value))
        return EnqueuedTask.model_validate(raw)

    async def reset_setting(self, name: str) -> EnqueuedTask:
        """Restore one setting to the server default."""
        route = _settings_registry.route_for(name)
        raw = await self._http.delete(route.path(self.uid))
        return EnqueuedTask.model_validate(raw)

    async def get_pagination(self) -> PaginationSettings:
        return await self.get_setting("pagination")

    async def update_pagination(self, pagination: PaginationSettings | Mapping[str, Any]) -> EnqueuedTask:
        return await self.update_setting("pagination", pagination)

    async def reset_pagination(self) -> EnqueuedTask:
        return await self.reset_setting("pagination")

    async def get_synonyms(self) -> dict[str, list[str]]:
        return await self.get_setting("synonyms")

    async def update_synonyms(self, synonyms: Mapping[str, list[str]] | None) -> EnqueuedTask:
        return await self.update_setting("synonyms", synonyms)

    async def reset_synonyms(self) -> EnqueuedTask:
        return await self.reset_setting("synonyms")

    async def get_stop_words(self) -> list[str]:
        return await self.get_setting("stop_words")

    async def update_stop_words(self, stop_words: Sequence[str] | None) -> EnqueuedTask:
        return await self.update_setting("stop_words", stop_words)

    async def reset_stop_words(self) -> EnqueuedTask:
        return await self.reset_setting("stop_words")

    async def get_ranking_rules(self) -> list[str]:
        return await self.get_setting("ranking_rules")

    async def update_ranking_rules(self, ranking_rules: Sequence[str] | None) -> EnqueuedTask:
        return await self.update_setting("ranking_rules", ranking_rules)

    async def reset_ranking_rules(self) -> EnqueuedTask:
        return await self.reset_setting("ranking_rules")

    async def get_distinct_attribute(self) -> str | None:
        return await self.get_setting("distinct_attribute")

    async def update_distinct_attribute(self, distinct_attribute: str | None) -> EnqueuedTask:
        return await self.update_setting("distinct_attribute", distinct_attribute)

    async def reset_distinct_attribute(self) -> EnqueuedTask:
        return await self.reset_setting("distinct_attribute")

    async def get_filterable_attributes(self) -> list[str]:
        return await self.get_setting("filterable_attributes")

    async def update_filterable_attributes(self, attributes: Sequence[str] | None) -> EnqueuedTask:
        return await self.update_setting("filterable_attributes", attributes)

    async def reset_filterable_attributes(self) -> EnqueuedTask:
        return await self.reset_setting("filterable_attributes")

    async def get_sortable_attributes(self) -> list[str]:
        return await self.get_setting("sortable_attributes")

    async def update_sortable_attributes(self, attributes: Sequence[str] | None) -> EnqueuedTask:
        return await self.update_setting("sortable_attributes", attributes)

    async def reset_sortable_attributes(self) -> EnqueuedTask:
        return await self.reset_setting("sortable_attributes")

    async def get_searchable_attributes(self) -> list[str]:
        return await self.get_setting("searchable_attributes")

    async def update_searchable_attributes(self, attributes: Sequence[str] | None) -> EnqueuedTask:
        return await self.update_setting("searchable_attributes", attributes)

    async def reset_searchable_attributes(self) -> EnqueuedTask:
        return await self.reset_setting("searchable_attributes")

    async def get_displayed_attributes(self) -> list[str]:
        return await self.get_setting("displayed_attributes")

    async def update_displayed_attributes(self, attributes: Sequence[str] | None) -> EnqueuedTask:
        return await self.update_setting("displayed_attributes", attributes)

    async def reset_displayed_attributes(self) -> EnqueuedTask:
        return await self.reset_setting("displayed_attributes")

    async def get_typo_tolerance(self) -> TypoTolerance:
        return await self.get_setting("typo_tolerance")

    async def update_typo_tolerance(self, typo_tolerance: TypoTolerance | Mapping[str, Any]) -> EnqueuedTask:
        return await self.update_setting("typo_tolerance", typo_tolerance)

    async def reset_typo_tolerance(self) -> EnqueuedTask:
        return await self.reset_setting("typo_tolerance")

    async def get_faceting(self) -> Faceting:
        return await self.get_setting("faceting")

    async def update_faceting(self, faceting: Faceting | Mapping[str, Any]) -> EnqueuedTask:
        return await self.update_setting("faceting", faceting)

    async def reset_faceting(self) -> EnqueuedTask:
        return await self.reset_setting("faceting")
