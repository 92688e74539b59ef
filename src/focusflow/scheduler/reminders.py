"""Reminder scheduler using pure asyncio.

Every ``interval`` seconds the task collection is scanned for pending tasks
whose date and HH:MM equal the current local date and minute. Each match is
sent to the notification sink.

There is no "already notified" marker: a task that still matches on the next
tick is reported again, until it is completed or its minute has passed.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from focusflow.models import DATE_FORMAT, TIME_FORMAT
from focusflow.notify import Reminder

if TYPE_CHECKING:
    from focusflow.clock import Clock
    from focusflow.models import Task
    from focusflow.notify import NotificationSink
    from focusflow.tasks import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60


class ReminderScheduler:
    """Idle → Scanning → Idle, once per interval, until shutdown."""

    def __init__(
        self,
        tasks: TaskStore,
        clock: Clock,
        sink: NotificationSink,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self._tasks = tasks
        self._clock = clock
        self._sink = sink
        self._interval = interval
        self._shutdown_event: asyncio.Event | None = None

    @property
    def interval(self) -> float:
        return self._interval

    def due_tasks(self, now: datetime) -> list[Task]:
        """Pending tasks whose date and minute equal ``now``."""
        now_date = now.strftime(DATE_FORMAT)
        now_minute = now.strftime(TIME_FORMAT)
        return [
            task
            for task in self._tasks.list_tasks_sorted()
            if task.date == now_date and task.time == now_minute and not task.completed
        ]

    def scan(self, now: datetime | None = None) -> list[Task]:
        """Run one tick: notify the sink about every due task."""
        now = now or self._clock.now()
        due = self.due_tasks(now)
        for task in due:
            reminder = Reminder(task.id, task.content, task.date, task.time)
            try:
                self._sink.notify(reminder)
            except Exception as e:
                logger.error("Notification for task %d failed: %s", task.id, e)
        if due:
            logger.info("Fired %d reminder(s) for %s", len(due), now.strftime("%Y-%m-%d %H:%M"))
        return due

    async def start(self, shutdown_event: asyncio.Event) -> None:
        """Scan every interval until shutdown_event is set."""
        self._shutdown_event = shutdown_event
        logger.info("Reminder scheduler started (interval=%ss)", self._interval)

        while not shutdown_event.is_set():
            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=self._interval)
                break  # shutdown requested
            except asyncio.TimeoutError:
                pass  # interval elapsed, scan

            self.scan()

        logger.info("Reminder scheduler stopped.")

    def stop(self) -> None:
        if self._shutdown_event is not None:
            self._shutdown_event.set()
