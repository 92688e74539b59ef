"""Notification sinks: where due reminders are delivered.

The scheduler decides *when* a reminder is due; a sink decides *how* it is
shown (log line, console alert, desktop popup, ...).
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Protocol, TextIO, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reminder:
    """A due task, as handed to a sink."""

    task_id: int
    content: str
    date: str
    time: str

    @property
    def text(self) -> str:
        return f"Reminder: {self.content}"


@runtime_checkable
class NotificationSink(Protocol):
    """Protocol that all reminder outputs must implement."""

    def notify(self, reminder: Reminder) -> None: ...


class LogSink:
    """Reports reminders through the logging system."""

    def notify(self, reminder: Reminder) -> None:
        logger.warning("%s (task %d, due %s %s)", reminder.text, reminder.task_id,
                       reminder.date, reminder.time)


class ConsoleSink:
    """Prints reminders as an alert line on a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def notify(self, reminder: Reminder) -> None:
        stream = self._stream or sys.stdout
        stream.write(f"\n\a*** {reminder.text} ***\n")
        stream.flush()


class FanoutSink:
    """Delivers each reminder to several sinks; one failing does not block the rest."""

    def __init__(self, *sinks: NotificationSink) -> None:
        self._sinks = list(sinks)

    def notify(self, reminder: Reminder) -> None:
        for sink in self._sinks:
            try:
                sink.notify(reminder)
            except Exception as e:
                logger.error("Sink %s failed for task %d: %s",
                             type(sink).__name__, reminder.task_id, e)
