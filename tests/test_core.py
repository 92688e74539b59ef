"""Tests for the FocusFlow application root."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime
from pathlib import Path

import pytest

from focusflow.config import FocusFlowConfig
from focusflow.core import FocusFlow


@pytest.fixture
def app(config: FocusFlowConfig, clock, sink) -> FocusFlow:
    return FocusFlow(config, clock=clock, sink=sink)


def _reload(config, clock, sink) -> FocusFlow:
    return FocusFlow(config, clock=clock, sink=sink)


class TestBoundaryOperations:
    def test_add_thought_goes_to_active_day(self, app: FocusFlow):
        app.shift_date(-1)
        app.add_thought("yesterday's note")
        assert [t.content for t in app.thoughts_for_day("2024-05-31")] == ["yesterday's note"]
        assert app.thoughts_for_day("2024-06-01") == []

    def test_thoughts_for_day_defaults_to_active(self, app: FocusFlow):
        app.add_thought("today")
        assert [t.content for t in app.thoughts_for_day()] == ["today"]

    def test_add_and_toggle_task(self, app: FocusFlow):
        task = app.add_task("Pay rent", date="2024-06-03", time="08:00")
        assert app.list_tasks() == [task]
        assert app.toggle_task(task.id).completed is True
        assert app.toggle_task(999) is None

    def test_invalid_task_ignored(self, app: FocusFlow):
        assert app.add_task("", date="2024-06-03", time="08:00") is None
        assert app.list_tasks() == []

    def test_thought_and_task_ids_disjoint(self, app: FocusFlow):
        thought = app.add_thought("x")
        task = app.add_task("y", date="2024-06-01", time="10:00")
        assert thought.id != task.id

    def test_shift_and_today(self, app: FocusFlow):
        assert app.current_date == "2024-06-01"
        assert app.shift_date(30) == "2024-07-01"
        assert app.go_to_today() == "2024-06-01"

    def test_monotonic_config_reaches_store(self, config: FocusFlowConfig, clock, sink):
        config.tasks.monotonic_completion = True
        app = FocusFlow(config, clock=clock, sink=sink)
        task = app.add_task("x", date="2024-06-01", time="10:00")
        app.toggle_task(task.id)
        app.toggle_task(task.id)
        assert task.completed is True


class TestPersistenceRoundTrip:
    def test_state_survives_restart(self, config, clock, sink):
        app = FocusFlow(config, clock=clock, sink=sink)
        first = app.add_thought("one")
        clock.advance(seconds=5)
        second = app.add_thought("two")
        task = app.add_task("Call mom", date="2024-06-02", time="18:00")
        app.toggle_task(task.id)

        reloaded = _reload(config, clock, sink)
        assert reloaded.thoughts_for_day("2024-06-01") == [first, second]
        assert reloaded.list_tasks() == [task]
        assert reloaded.list_tasks()[0].completed is True

    def test_new_ids_after_restart_do_not_collide(self, config, clock, sink):
        app = FocusFlow(config, clock=clock, sink=sink)
        old = [app.add_thought(str(i)).id for i in range(3)]

        reloaded = _reload(config, clock, sink)  # same frozen millisecond
        new = reloaded.add_thought("after restart").id
        assert new > max(old)

    def test_corrupt_tasks_start_empty(self, config, clock, sink):
        config.storage.data_dir.mkdir(parents=True)
        (config.storage.data_dir / "tasks.json").write_text("[{broken", encoding="utf-8")
        (config.storage.data_dir / "thoughts.json").write_text(
            json.dumps({"2024-06-01": [{"id": 1, "content": "kept", "timestamp": "08:00:00"}]}),
            encoding="utf-8",
        )

        app = FocusFlow(config, clock=clock, sink=sink)
        assert app.list_tasks() == []
        assert [t.content for t in app.thoughts_for_day()] == ["kept"]

    def test_every_mutation_rewrites_record(self, config, clock, sink):
        app = FocusFlow(config, clock=clock, sink=sink)
        path: Path = config.storage.data_dir / "tasks.json"

        app.add_task("a", date="2024-06-01", time="10:00")
        assert len(json.loads(path.read_text(encoding="utf-8"))) == 1
        app.add_task("b", date="2024-06-01", time="11:00")
        assert len(json.loads(path.read_text(encoding="utf-8"))) == 2

    def test_undecodable_tasks_record_starts_empty(self, config, clock, sink):
        config.storage.data_dir.mkdir(parents=True)
        (config.storage.data_dir / "tasks.json").write_bytes(b"[\xff\xfe broken")

        app = FocusFlow(config, clock=clock, sink=sink)
        assert app.list_tasks() == []
        assert app.add_task("fresh", date="2024-06-01", time="10:00") is not None


class TestExport:
    def test_export_active_day(self, app: FocusFlow, config):
        app.add_thought("note")
        path = app.export_day()
        assert path == config.storage.export_dir / "2024-06-01.md"
        assert "note" in path.read_text(encoding="utf-8")

    def test_export_empty_day(self, app: FocusFlow):
        assert app.export_day("2000-01-01") is None


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_fires_reminders_and_stop_ends(self, config, clock, sink):
        config.scheduler.reminder_interval = 0.01
        app = FocusFlow(config, clock=clock, sink=sink)
        app.add_task("Stretch", date="2024-06-01", time="09:30")

        runner = asyncio.create_task(app.start())
        await asyncio.sleep(0.05)
        await app.stop()
        await asyncio.wait_for(runner, timeout=1)

        assert "Stretch" in sink.contents

    @pytest.mark.asyncio
    async def test_stop_flushes_writes(self, config, clock, sink):
        app = FocusFlow(config, clock=clock, sink=sink)
        app.add_thought("inside the loop")
        await app.stop()

        reloaded = _reload(config, clock, sink)
        assert [t.content for t in reloaded.thoughts_for_day()] == ["inside the loop"]

    def test_clock_moves_past_minute(self, config, clock, sink):
        app = FocusFlow(config, clock=clock, sink=sink)
        app.add_task("x", date="2024-06-01", time="09:30")
        app.scheduler.scan()
        clock.set(datetime(2024, 6, 1, 9, 31))
        app.scheduler.scan()
        assert sink.contents == ["x"]
