from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from meilikit.domain.models.base import CamelModel
from meilikit.domain.models.task_status import TaskStatus
from meilikit.domain.models.task_type import TaskType


class TaskFilters(CamelModel):
    """Filters shared by listing, canceling and deleting tasks. Every field is optional."""

    index_uids: list[str] | None = None
    uids: list[int] | None = None
    types: list[TaskType] | None = None
    statuses: list[TaskStatus] | None = None
    canceled_by: list[int] | None = None
    before_enqueued_at: datetime | None = None
    after_enqueued_at: datetime | None = None
    before_started_at: datetime | None = None
    after_started_at: datetime | None = None
    before_finished_at: datetime | None = None
    after_finished_at: datetime | None = None

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TasksQuery(TaskFilters):
    limit: int | None = None
    from_: int | None = Field(default=None, alias="from")


class CancelTasksQuery(TaskFilters):
    pass


class DeleteTasksQuery(TaskFilters):
    pass
