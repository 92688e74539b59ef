"""Local CLI REPL connector.

Plain text is recorded as a thought on the active day. Commands:

    /task YYYY-MM-DD HH:MM text   schedule a reminder
    /done ID                      toggle a task's completion
    /tasks                        list tasks in due order
    /prev  /next  /today          move the active day
    /day                          show the active day's thoughts
    /export                       write the active day as markdown
    exit | quit                   leave
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from focusflow.core import FocusFlow

logger = logging.getLogger(__name__)

USAGE = "Usage: /task YYYY-MM-DD HH:MM text | /done ID | /tasks | /prev | /next | /today | /day | /export"


class CLIConnector:
    """Interactive REPL connector. Reads from stdin, writes to stdout."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._running = False
        self._out = out

    @property
    def name(self) -> str:
        return "cli"

    def _print(self, text: str = "") -> None:
        print(text, file=self._out or sys.stdout)

    async def start(self, app: FocusFlow) -> None:
        self._running = True
        loop = asyncio.get_running_loop()

        self._print("FocusFlow (type 'exit' or Ctrl+C to quit)")
        self._print("-" * 42)
        self.show_day(app)

        while self._running:
            try:
                line = await loop.run_in_executor(None, self._read_input, app.current_date)
            except (EOFError, KeyboardInterrupt):
                self._print("\nBye!")
                break

            if line is None or line.strip().lower() in ("exit", "quit"):
                self._print("Bye!")
                break

            self.handle_line(app, line)

    def _read_input(self, day: str) -> str | None:
        try:
            out = self._out or sys.stdout
            out.write(f"\n[{day}] > ")
            out.flush()
            raw = sys.stdin.buffer.readline()
            if not raw:
                return None
            return raw.decode("utf-8", errors="replace").rstrip("\n")
        except EOFError:
            return None

    async def stop(self) -> None:
        self._running = False

    # ── Command dispatch ─────────────────────────────────────

    def handle_line(self, app: FocusFlow, line: str) -> None:
        text = line.strip()
        if not text:
            return
        if not text.startswith("/"):
            thought = app.add_thought(text)
            if thought:
                self._print(f"  {thought.timestamp}  {thought.content}")
            return

        command, _, rest = text.partition(" ")
        if command == "/task":
            self._add_task(app, rest)
        elif command == "/done":
            self._toggle(app, rest)
        elif command == "/tasks":
            self.show_tasks(app)
        elif command == "/prev":
            app.shift_date(-1)
            self.show_day(app)
        elif command == "/next":
            app.shift_date(1)
            self.show_day(app)
        elif command == "/today":
            app.go_to_today()
            self.show_day(app)
        elif command == "/day":
            self.show_day(app)
        elif command == "/export":
            path = app.export_day()
            self._print(f"Exported to {path}" if path else "Nothing to export for this day.")
        else:
            self._print(USAGE)

    def _add_task(self, app: FocusFlow, rest: str) -> None:
        parts = rest.split(maxsplit=2)
        if len(parts) < 3:
            self._print(USAGE)
            return
        date, time, content = parts
        task = app.add_task(content, date=date, time=time)
        if task is None:
            self._print("Task not added: check the date (YYYY-MM-DD) and time (HH:MM).")
            return
        self._print(f"  #{task.id}  {task.date} {task.time}  {task.content}")

    def _toggle(self, app: FocusFlow, rest: str) -> None:
        try:
            task_id = int(rest.strip())
        except ValueError:
            self._print(USAGE)
            return
        task = app.toggle_task(task_id)
        if task is None:
            self._print(f"No task #{task_id}.")
            return
        state = "done" if task.completed else "pending"
        self._print(f"  #{task.id} {state}")

    # ── Views ────────────────────────────────────────────────

    def show_day(self, app: FocusFlow) -> None:
        thoughts = app.thoughts_for_day()
        self._print(f"== {app.current_date} ({len(thoughts)} thoughts)")
        for thought in thoughts:
            self._print(f"  {thought.timestamp}  {thought.content}")

    def show_tasks(self, app: FocusFlow) -> None:
        tasks = app.list_tasks()
        if not tasks:
            self._print("No tasks.")
            return
        for task in tasks:
            mark = "x" if task.completed else " "
            self._print(f"  [{mark}] #{task.id}  {task.date} {task.time}  {task.content}")
