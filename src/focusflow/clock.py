"""Wall clock abstraction so the stores and scheduler can be driven by fake time."""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the host's local wall-clock time."""

    def now(self) -> datetime: ...

    def today(self) -> date: ...


class SystemClock:
    """Local wall clock of the host (naive datetimes, no timezone handling)."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()
