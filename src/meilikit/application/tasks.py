from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from typing import cast

import inject

from meilikit.domain.exceptions import TaskTimeoutError
from meilikit.domain.models.enqueued_task import EnqueuedTask
from meilikit.domain.models.task import Task, TasksResults
from meilikit.domain.models.tasks_query import CancelTasksQuery, DeleteTasksQuery, TasksQuery
from meilikit.domain.models.wait_options import WaitOptions
from meilikit.domain.repositories import HttpTransport

logger = logging.getLogger(__name__)

PollCallback = Callable[[Task], None]


class TaskClient:
    """Reads server tasks and turns enqueued operations into awaitable completions."""

    def __init__(
        self,
        http: HttpTransport | None = None,
        wait_options: WaitOptions | None = None,
    ) -> None:
        self._http = http or cast(HttpTransport, inject.instance(HttpTransport))
        self._wait_options = wait_options or WaitOptions()

    @property
    def wait_options(self) -> WaitOptions:
        return self._wait_options

    async def get_task(self, uid: int) -> Task:
        """Fetch a single task. An unknown uid surfaces as ``ApiError`` (``task_not_found``)."""
        raw = await self._http.get(f"tasks/{uid}")
        return Task.model_validate(raw)

    async def get_tasks(self, query: TasksQuery | None = None) -> TasksResults:
        params = query.to_params() if query is not None else None
        raw = await self._http.get("tasks", params)
        return TasksResults.model_validate(raw)

    async def cancel_tasks(self, query: CancelTasksQuery | None = None) -> EnqueuedTask:
        """Cancel every enqueued or processing task matching ``query``.

        The cancelation is itself a task and can be waited on.
        """
        params = query.to_params() if query is not None else None
        raw = await self._http.post("tasks/cancel", params=params)
        return EnqueuedTask.model_validate(raw)

    async def delete_tasks(self, query: DeleteTasksQuery | None = None) -> EnqueuedTask:
        """Delete finished tasks matching ``query`` from the server history."""
        params = query.to_params() if query is not None else None
        raw = await self._http.delete("tasks", params)
        return EnqueuedTask.model_validate(raw)

    async def wait_for_task(
        self,
        task_uid: int,
        options: WaitOptions | None = None,
        *,
        on_poll: PollCallback | None = None,
    ) -> Task:
        """
        Poll ``task_uid`` until it reaches a terminal status.

        A task that ends ``failed`` or ``canceled`` is returned, not raised;
        inspect ``task.error`` for the cause. Only running out of the time
        budget raises, with ``TaskTimeoutError`` carrying the last snapshot.
        Timing out abandons the wait; the server keeps processing the task.
        """
        options = options or self._wait_options
        started = time.monotonic()
        while True:
            task = await self.get_task(task_uid)
            if on_poll is not None:
                on_poll(task)
            if task.status.is_terminal:
                return task

            elapsed_ms = (time.monotonic() - started) * 1000
            logger.debug(
                "Task not finished yet",
                extra={"task_uid": task_uid, "status": task.status.value, "elapsed_ms": elapsed_ms},
            )
            if elapsed_ms >= options.timeout_ms:
                logger.warning(
                    "Gave up waiting for task",
                    extra={"task_uid": task_uid, "timeout_ms": options.timeout_ms},
                )
                raise TaskTimeoutError(task_uid, options.timeout_ms, elapsed_ms, task=task)
            await asyncio.sleep(options.interval_ms / 1000)

    async def wait_for_tasks(
        self,
        task_uids: Sequence[int],
        options: WaitOptions | None = None,
    ) -> list[Task]:
        """
        Wait for each task in turn and return them in input order.

        The first timeout aborts the call; later tasks are not polled.
        """
        tasks: list[Task] = []
        for task_uid in task_uids:
            tasks.append(await self.wait_for_task(task_uid, options))
        return tasks
