from __future__ import annotations

from typing import Any

from pydantic import Field

from meilikit.domain.models.base import CamelModel, Timestamp
from meilikit.domain.models.task_status import TaskStatus
from meilikit.domain.models.task_type import TaskType


class ErrorInfo(CamelModel):
    code: str = Field(description="Machine readable error code.")
    message: str = Field(description="Human readable explanation.")
    type: str = Field(description="Error category.")
    link: str | None = Field(default=None, description="Documentation link.")


class TaskDetails(CamelModel):
    """Operation-specific outcome; only the fields relevant to the task type are set."""

    received_documents: int | None = None
    indexed_documents: int | None = None
    deleted_documents: int | None = None
    provided_ids: int | None = None
    primary_key: str | None = None
    ranking_rules: list[str] | None = None
    searchable_attributes: list[str] | None = None
    displayed_attributes: list[str] | None = None
    filterable_attributes: list[str] | None = None
    sortable_attributes: list[str] | None = None
    stop_words: list[str] | None = None
    synonyms: dict[str, list[str]] | None = None
    distinct_attribute: str | None = None
    swaps: list[dict[str, Any]] | None = None
    matched_tasks: int | None = None
    canceled_tasks: int | None = None
    deleted_tasks: int | None = None
    original_filter: str | None = None
    dump_uid: str | None = None


class Task(CamelModel):
    """Server-side snapshot of a task. Each poll yields a fresh instance."""

    uid: int = Field(description="Unique task identifier.")
    index_uid: str | None = Field(default=None, description="Target index, if any.")
    status: TaskStatus = Field(description="Current processing status.")
    # Types added by newer servers are kept as plain strings.
    type: TaskType | str = Field(union_mode="left_to_right", description="Kind of operation.")
    canceled_by: int | None = Field(
        default=None, description="Uid of the cancelation task that canceled this one."
    )
    details: TaskDetails | None = Field(default=None, description="Operation outcome.")
    error: ErrorInfo | None = Field(default=None, description="Cause of a failure.")
    duration: str | None = Field(default=None, description="ISO-8601 processing duration.")
    enqueued_at: Timestamp = Field(description="When the task was enqueued.")
    started_at: Timestamp | None = Field(default=None, description="When processing began.")
    finished_at: Timestamp | None = Field(default=None, description="When processing ended.")

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class TasksResults(CamelModel):
    results: list[Task] = Field(default_factory=list)
    limit: int
    from_: int | None = Field(default=None, alias="from")
    next: int | None = None
