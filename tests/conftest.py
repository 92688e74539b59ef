"""Shared test doubles: a settable clock and a capturing notification sink."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from focusflow.config import FocusFlowConfig, StorageConfig
from focusflow.models import IdAllocator
from focusflow.notify import Reminder
from focusflow.state import AppState


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def set(self, now: datetime) -> None:
        self.current = now

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class CapturingSink:
    def __init__(self) -> None:
        self.reminders: list[Reminder] = []

    def notify(self, reminder: Reminder) -> None:
        self.reminders.append(reminder)

    @property
    def contents(self) -> list[str]:
        return [r.content for r in self.reminders]


class PersistSpy:
    """Stands in for a Persistence save method; records every snapshot."""

    def __init__(self) -> None:
        self.calls: list = []

    def __call__(self, collection) -> None:
        self.calls.append(collection)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 9, 30, 0))


@pytest.fixture
def sink() -> CapturingSink:
    return CapturingSink()


@pytest.fixture
def state(clock: FakeClock) -> AppState:
    return AppState(ids=IdAllocator(clock), active_date=clock.today().isoformat())


@pytest.fixture
def config(tmp_path: Path) -> FocusFlowConfig:
    return FocusFlowConfig(
        storage=StorageConfig(data_dir=tmp_path / "data", export_dir=tmp_path / "daily"),
        pid_file=tmp_path / "focusflow.pid",
    )


@pytest.fixture
def persist() -> PersistSpy:
    return PersistSpy()
