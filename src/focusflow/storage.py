"""Durable local storage for the two root collections.

Layout:
    ~/.focusflow/data/
    ├── thoughts.json     # {"YYYY-MM-DD": [{id, content, timestamp}, ...]}
    └── tasks.json        # [{id, content, time, date, completed}, ...]

Every save rewrites the whole record. Nothing is appended or diffed.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from focusflow.models import Task, Thought, is_valid_date

logger = logging.getLogger(__name__)

THOUGHTS_KEY = "thoughts"
TASKS_KEY = "tasks"

_LOAD_ERRORS = (json.JSONDecodeError, UnicodeDecodeError, ValueError, KeyError, TypeError)


class KeyValueStore:
    """One JSON text file per key under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, text: str) -> None:
        """Overwrite ``key`` atomically (temp file + rename)."""
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class Persistence:
    """Load/save of the thought log and the task collection."""

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv
        self._pending = 0

    # ── Load ─────────────────────────────────────────────────

    def load_thoughts(self) -> dict[str, list[Thought]]:
        try:
            raw = self.kv.get(THOUGHTS_KEY)
            if raw is None:
                return {}
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            log: dict[str, list[Thought]] = {}
            seen: set[int] = set()
            for day, entries in data.items():
                if not is_valid_date(day):
                    raise ValueError(f"malformed day key {day!r}")
                if not isinstance(entries, list):
                    raise TypeError(f"day {day!r} must hold a list")
                log[day] = [Thought.from_dict(entry) for entry in entries]
                for thought in log[day]:
                    if thought.id in seen:
                        raise ValueError(f"duplicate thought id {thought.id}")
                    seen.add(thought.id)
        except _LOAD_ERRORS as e:
            logger.error("Error parsing saved thoughts, starting empty: %s", e)
            return {}
        logger.debug("Loaded thoughts for %d days", len(log))
        return log

    def load_tasks(self) -> dict[int, Task]:
        try:
            raw = self.kv.get(TASKS_KEY)
            if raw is None:
                return {}
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            tasks: dict[int, Task] = {}
            for entry in data:
                task = Task.from_dict(entry)
                if task.id in tasks:
                    raise ValueError(f"duplicate task id {task.id}")
                tasks[task.id] = task
        except _LOAD_ERRORS as e:
            logger.error("Error parsing saved tasks, starting empty: %s", e)
            return {}
        logger.debug("Loaded %d tasks", len(tasks))
        return tasks

    def load_all(self) -> tuple[dict[str, list[Thought]], dict[int, Task]]:
        """Load both records; ids must be unique across the two.

        A task id that is already used by a thought makes the task record
        unusable, so tasks start empty.
        """
        thoughts = self.load_thoughts()
        tasks = self.load_tasks()
        thought_ids = {t.id for entries in thoughts.values() for t in entries}
        clashes = thought_ids.intersection(tasks)
        if clashes:
            logger.error(
                "Saved tasks reuse thought ids %s, starting tasks empty", sorted(clashes)
            )
            tasks = {}
        return thoughts, tasks

    # ── Save ─────────────────────────────────────────────────

    def save_thoughts(self, log: dict[str, list[Thought]]) -> None:
        payload = {day: [t.to_dict() for t in entries] for day, entries in log.items()}
        self._submit(THOUGHTS_KEY, json.dumps(payload, ensure_ascii=False))

    def save_tasks(self, tasks: dict[int, Task]) -> None:
        payload = [t.to_dict() for t in tasks.values()]
        self._submit(TASKS_KEY, json.dumps(payload, ensure_ascii=False))

    def _submit(self, key: str, text: str) -> None:
        """Write ``text`` now, or on the next loop turn when a loop is running.

        The text is serialized by the caller before scheduling, so each
        write carries the collection as it was at the mutation.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._write(key, text)
            return
        self._pending += 1
        loop.call_soon(self._write_scheduled, key, text)

    def _write_scheduled(self, key: str, text: str) -> None:
        try:
            self._write(key, text)
        finally:
            self._pending -= 1

    def _write(self, key: str, text: str) -> None:
        try:
            self.kv.set(key, text)
        except OSError as e:
            logger.error("Failed to save %s: %s", key, e)

    @property
    def pending(self) -> int:
        return self._pending

    async def flush(self) -> None:
        """Yield to the loop until every scheduled write has run."""
        while self._pending:
            await asyncio.sleep(0)
