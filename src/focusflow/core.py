"""FocusFlow application root.

Responsibilities:
1. Load persisted thoughts and tasks into one AppState
2. Wire the stores, date navigator and reminder scheduler to that state
3. Persist the whole changed collection after every mutation
4. Expose the boundary operations the presentation layer calls
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from focusflow.clock import SystemClock
from focusflow.config import FocusFlowConfig
from focusflow.export import export_day
from focusflow.journal import ThoughtStore
from focusflow.models import IdAllocator, Task, Thought
from focusflow.navigator import DateNavigator
from focusflow.notify import LogSink
from focusflow.scheduler.reminders import ReminderScheduler
from focusflow.state import AppState
from focusflow.storage import KeyValueStore, Persistence
from focusflow.tasks import TaskStore

if TYPE_CHECKING:
    from focusflow.clock import Clock
    from focusflow.notify import NotificationSink

logger = logging.getLogger(__name__)


class FocusFlow:
    """Owns the state and routes boundary calls to the stores."""

    def __init__(
        self,
        config: FocusFlowConfig,
        clock: Clock | None = None,
        sink: NotificationSink | None = None,
    ) -> None:
        self.config = config
        self.clock = clock or SystemClock()
        self.persistence = Persistence(KeyValueStore(config.storage.data_dir))

        thoughts, tasks = self.persistence.load_all()
        self.state = AppState(
            ids=IdAllocator(self.clock),
            active_date=self.clock.today().isoformat(),
            thoughts=thoughts,
            tasks=tasks,
        )
        logger.info(
            "Loaded %d days of thoughts and %d tasks from %s",
            len(self.state.thoughts),
            len(self.state.tasks),
            config.storage.data_dir,
        )

        self.journal = ThoughtStore(self.state, self.clock, self.persistence.save_thoughts)
        self.tasks = TaskStore(
            self.state,
            self.persistence.save_tasks,
            monotonic_completion=config.tasks.monotonic_completion,
        )
        self.navigator = DateNavigator(self.state, self.clock)
        self.scheduler = ReminderScheduler(
            self.tasks,
            self.clock,
            sink or LogSink(),
            interval=config.scheduler.reminder_interval,
        )
        self._shutdown_event: asyncio.Event | None = None

    # ── Thoughts ─────────────────────────────────────────────

    def add_thought(self, content: str) -> Thought | None:
        """Append a thought to the active day."""
        return self.journal.add_thought(self.navigator.current_date(), content)

    def thoughts_for_day(self, day: str | None = None) -> list[Thought]:
        return self.journal.get_thoughts(day or self.navigator.current_date())

    # ── Tasks ────────────────────────────────────────────────

    def add_task(self, content: str, date: str, time: str) -> Task | None:
        return self.tasks.add_task(content, time=time, date=date)

    def toggle_task(self, task_id: int) -> Task | None:
        return self.tasks.toggle_task(task_id)

    def list_tasks(self) -> list[Task]:
        return self.tasks.list_tasks_sorted()

    # ── Active day ───────────────────────────────────────────

    @property
    def current_date(self) -> str:
        return self.navigator.current_date()

    def shift_date(self, offset: int) -> str:
        return self.navigator.shift_date(offset)

    def go_to_today(self) -> str:
        return self.navigator.go_to_today()

    # ── Export ───────────────────────────────────────────────

    def export_day(self, day: str | None = None) -> Path | None:
        day = day or self.navigator.current_date()
        return export_day(
            self.journal.get_thoughts(day),
            day,
            self.config.storage.export_dir,
            exported_at=self.clock.now(),
        )

    # ── Lifecycle ─────────────────────────────────────────────

    async def start(self, shutdown_event: asyncio.Event | None = None) -> None:
        """Run the reminder scheduler until shutdown."""
        self._shutdown_event = shutdown_event or asyncio.Event()
        await self.scheduler.start(self._shutdown_event)

    async def stop(self) -> None:
        """Tear down the scheduler and wait for queued writes."""
        if self._shutdown_event is not None:
            self._shutdown_event.set()
        await self.persistence.flush()
