"""Scheduled one-shot tasks with a completion flag."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from focusflow.models import Task, is_valid_date, is_valid_time

if TYPE_CHECKING:
    from focusflow.state import AppState

logger = logging.getLogger(__name__)


class TaskStore:
    """Task collection keyed by id; display order is derived on every read."""

    def __init__(
        self,
        state: AppState,
        persist: Callable[[dict[int, Task]], None],
        monotonic_completion: bool = False,
    ) -> None:
        self._state = state
        self._persist = persist
        self._monotonic = monotonic_completion

    def add_task(self, content: str, time: str, date: str) -> Task | None:
        """Insert a new pending task. Invalid input is dropped without error."""
        if not content.strip():
            logger.debug("Rejected task: blank content")
            return None
        if not is_valid_time(time):
            logger.debug("Rejected task: bad time %r", time)
            return None
        if not is_valid_date(date):
            logger.debug("Rejected task: bad date %r", date)
            return None

        task = Task(id=self._state.ids.next_id(), content=content, time=time, date=date)
        self._state.tasks[task.id] = task
        logger.debug("Added task %d due %s %s", task.id, date, time)
        self._persist(self._state.tasks)
        return task

    def toggle_task(self, task_id: int) -> Task | None:
        """Flip ``completed`` on the task; unknown ids are ignored."""
        task = self._state.tasks.get(task_id)
        if task is None:
            logger.debug("Toggle ignored: no task %s", task_id)
            return None
        if self._monotonic and task.completed:
            return task

        task.completed = not task.completed
        self._persist(self._state.tasks)
        return task

    def list_tasks_sorted(self) -> list[Task]:
        # sorted() is stable: ties keep insertion order
        return sorted(self._state.tasks.values(), key=lambda t: t.sort_key)

    def get(self, task_id: int) -> Task | None:
        return self._state.tasks.get(task_id)

    def __len__(self) -> int:
        return len(self._state.tasks)
