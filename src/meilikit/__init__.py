from meilikit.application.client import Client
from meilikit.application.indexes import Index
from meilikit.application.keys import KeyClient
from meilikit.application.tasks import TaskClient
from meilikit.domain.exceptions import (
    ApiError,
    ClientValidationError,
    ErrorCode,
    MeiliSearchError,
    TaskTimeoutError,
    TransportError,
)
from meilikit.domain.models import (
    ContentType,
    EnqueuedTask,
    SearchParams,
    Settings,
    Task,
    TasksQuery,
    TaskStatus,
    TaskType,
    WaitOptions,
)
from meilikit.infrastructure.http import HttpRequests
from meilikit.version import __version__

__all__ = [
    "Client",
    "Index",
    "TaskClient",
    "KeyClient",
    "HttpRequests",
    "MeiliSearchError",
    "ApiError",
    "TransportError",
    "ClientValidationError",
    "TaskTimeoutError",
    "ErrorCode",
    "ContentType",
    "EnqueuedTask",
    "SearchParams",
    "Settings",
    "Task",
    "TasksQuery",
    "TaskStatus",
    "TaskType",
    "WaitOptions",
    "__version__",
]
