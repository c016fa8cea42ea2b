from pydantic import ConfigDict, Field

from meilikit.domain.models.base import CamelModel, Timestamp
from meilikit.domain.models.task_status import TaskStatus
from meilikit.domain.models.task_type import TaskType


class EnqueuedTask(CamelModel):
    """Handle returned immediately by every mutating call; poll it with the task client."""

    model_config = ConfigDict(frozen=True)

    task_uid: int = Field(description="Identifier of the server-side task.")
    index_uid: str | None = Field(
        default=None, description="Index the task operates on, if any."
    )
    status: TaskStatus = Field(description="Status at enqueue time.")
    type: TaskType | str = Field(
        union_mode="left_to_right", description="Kind of operation that was enqueued."
    )
    enqueued_at: Timestamp = Field(description="When the server accepted the task.")
