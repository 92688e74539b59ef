"""Journal and reminder records plus their persisted dict form.

Field names match the stored JSON exactly:

    thought: {"id", "content", "timestamp"}
    task:    {"id", "content", "time", "date", "completed"}
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from focusflow.clock import Clock

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def is_valid_date(value: object) -> bool:
    """True for a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def is_valid_time(value: object) -> bool:
    """True for a 24h wall-clock minute written as HH:MM."""
    if not isinstance(value, str) or not _TIME_RE.match(value):
        return False
    try:
        datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return False
    return True


def _require(data: dict, key: str, kind: type) -> object:
    value = data[key]
    # bool is an int subclass; ids must be real integers
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"field {key!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class Thought:
    """One journal entry. Position inside its day is the only ordering."""

    id: int
    content: str
    timestamp: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Thought:
        if not isinstance(data, dict):
            raise TypeError(f"thought record must be an object, got {type(data).__name__}")
        return cls(
            id=_require(data, "id", int),
            content=_require(data, "content", str),
            timestamp=_require(data, "timestamp", str),
        )


@dataclass
class Task:
    """A one-shot reminder due at ``date`` ``time`` (host local time)."""

    id: int
    content: str
    time: str
    date: str
    completed: bool = False

    @property
    def sort_key(self) -> tuple[str, str]:
        # Zero-padded ISO strings compare the same as the datetimes they encode
        return (self.date, self.time)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        if not isinstance(data, dict):
            raise TypeError(f"task record must be an object, got {type(data).__name__}")
        task = cls(
            id=_require(data, "id", int),
            content=_require(data, "content", str),
            time=_require(data, "time", str),
            date=_require(data, "date", str),
            completed=_require(data, "completed", bool),
        )
        if not is_valid_date(task.date):
            raise ValueError(f"task {task.id}: malformed date {task.date!r}")
        if not is_valid_time(task.time):
            raise ValueError(f"task {task.id}: malformed time {task.time!r}")
        return task


class IdAllocator:
    """Hands out clock-derived integer ids that never repeat.

    Each id is the current epoch milliseconds, bumped past the previous id
    when two allocations land in the same millisecond.
    """

    def __init__(self, clock: Clock, floor: int = 0) -> None:
        self._clock = clock
        self._last = floor

    def next_id(self) -> int:
        millis = int(self._clock.now().timestamp() * 1000)
        self._last = max(millis, self._last + 1)
        return self._last

    def observe(self, existing_id: int) -> None:
        """Make sure future ids are greater than an id loaded from storage."""
        self._last = max(self._last, existing_id)
