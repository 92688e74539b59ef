"""Process runner: wires the app root, scheduler and front end together.

Usage: python -m focusflow serve

Manages:
- Reminder scheduler lifecycle
- Optional connector (CLI REPL)
- PID file (one process per data directory)
- Graceful shutdown (SIGTERM/SIGINT)
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
from typing import TYPE_CHECKING

from focusflow.config import FocusFlowConfig, load_config
from focusflow.core import FocusFlow

if TYPE_CHECKING:
    from focusflow.connectors.base import Connector
    from focusflow.notify import NotificationSink

logger = logging.getLogger(__name__)


class FocusFlowDaemon:
    """Runs FocusFlow until the connector quits or a signal arrives."""

    def __init__(
        self,
        config: FocusFlowConfig | None = None,
        sink: NotificationSink | None = None,
        connector: Connector | None = None,
    ) -> None:
        self.config = config or load_config()
        self._sink = sink
        self._connector = connector
        self._shutdown_event = asyncio.Event()

    # ── PID file management ──────────────────────────────────

    def _write_pid(self) -> None:
        self.config.pid_file.parent.mkdir(parents=True, exist_ok=True)
        self.config.pid_file.write_text(str(os.getpid()))
        logger.info("PID file written: %s (pid=%d)", self.config.pid_file, os.getpid())

    def _remove_pid(self) -> None:
        if self.config.pid_file.exists():
            self.config.pid_file.unlink()

    def _check_existing(self) -> None:
        if not self.config.pid_file.exists():
            return
        try:
            pid = int(self.config.pid_file.read_text().strip())
            os.kill(pid, 0)  # Check if process exists
            print(f"FocusFlow already running (pid={pid}). Exiting.", file=sys.stderr)
            sys.exit(1)
        except (ProcessLookupError, ValueError):
            # Stale PID file
            self._remove_pid()

    # ── Signal handling ──────────────────────────────────────

    def _setup_signals(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._handle_signal, sig)

    def _handle_signal(self, sig: signal.Signals) -> None:
        logger.info("Received %s, shutting down...", sig.name)
        self._shutdown_event.set()

    # ── Main run loop ────────────────────────────────────────

    async def _run_connector(self, app: FocusFlow) -> None:
        try:
            await self._connector.start(app)
        finally:
            # Quitting the front end ends the session
            self._shutdown_event.set()

    async def run(self) -> None:
        self._check_existing()
        self._write_pid()
        self._setup_signals()

        app = FocusFlow(self.config, sink=self._sink)
        logger.info("FocusFlow starting (data=%s)", self.config.storage.data_dir)

        front_end: asyncio.Task | None = None
        if self._connector is not None:
            front_end = asyncio.create_task(self._run_connector(app))

        try:
            # Returns once the shutdown event is set
            await app.start(self._shutdown_event)
        except asyncio.CancelledError:
            pass
        finally:
            if front_end is not None:
                await self._connector.stop()
                front_end.cancel()
                await asyncio.gather(front_end, return_exceptions=True)
            await app.stop()
            self._remove_pid()
            logger.info("FocusFlow stopped.")
