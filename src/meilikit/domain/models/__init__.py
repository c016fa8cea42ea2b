from meilikit.domain.models.documents import ContentType, Document, DocumentsQuery, ResourceResults
from meilikit.domain.models.enqueued_task import EnqueuedTask
from meilikit.domain.models.index import (
    IndexesQuery,
    IndexesResults,
    IndexObject,
    IndexOptions,
    IndexStats,
    IndexSwap,
)
from meilikit.domain.models.keys import Key, KeyCreation, KeysQuery, KeysResults, KeyUpdate
from meilikit.domain.models.search import (
    Filter,
    MatchingStrategy,
    MultiSearchQuery,
    MultiSearchResponse,
    MultiSearchResult,
    SearchParams,
    SearchResponse,
)
from meilikit.domain.models.server import Health, Stats, Version
from meilikit.domain.models.settings import (
    Faceting,
    MinWordSizeForTypos,
    PaginationSettings,
    Settings,
    TypoTolerance,
)
from meilikit.domain.models.task import ErrorInfo, Task, TaskDetails, TasksResults
from meilikit.domain.models.task_status import TaskStatus
from meilikit.domain.models.task_type import TaskType
from meilikit.domain.models.tasks_query import (
    CancelTasksQuery,
    DeleteTasksQuery,
    TaskFilters,
    TasksQuery,
)
from meilikit.domain.models.wait_options import WaitOptions

__all__ = [
    "Task",
    "TaskStatus",
    "TaskType",
    "TaskDetails",
    "ErrorInfo",
    "TasksResults",
    "TasksQuery",
    "TaskFilters",
    "CancelTasksQuery",
    "DeleteTasksQuery",
    "EnqueuedTask",
    "WaitOptions",
    "IndexObject",
    "IndexOptions",
    "IndexesQuery",
    "IndexesResults",
    "IndexStats",
    "IndexSwap",
    "ContentType",
    "Document",
    "DocumentsQuery",
    "ResourceResults",
    "Filter",
    "MatchingStrategy",
    "SearchParams",
    "SearchResponse",
    "MultiSearchQuery",
    "MultiSearchResult",
    "MultiSearchResponse",
    "Settings",
    "TypoTolerance",
    "MinWordSizeForTypos",
    "Faceting",
    "PaginationSettings",
    "Key",
    "KeyCreation",
    "KeyUpdate",
    "KeysQuery",
    "KeysResults",
    "Health",
    "Stats",
    "Version",
]
