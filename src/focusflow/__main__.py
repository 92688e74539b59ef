"""Entry point: python -m focusflow [chat|serve]

- No args / "chat": Interactive CLI REPL with console reminders
- "serve":          Headless mode, reminders go to the log
"""

from __future__ import annotations

import asyncio
import logging
import sys

from focusflow.config import load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _run_cli() -> None:
    """Interactive CLI REPL mode."""
    config = load_config()
    _setup_logging(config.log_level)

    from focusflow.connectors.cli import CLIConnector
    from focusflow.daemon import FocusFlowDaemon
    from focusflow.notify import ConsoleSink, FanoutSink, LogSink

    daemon = FocusFlowDaemon(
        config,
        sink=FanoutSink(ConsoleSink(), LogSink()),
        connector=CLIConnector(),
    )
    try:
        asyncio.run(daemon.run())
    except KeyboardInterrupt:
        pass


def _run_serve() -> None:
    """Headless mode, scheduler only."""
    config = load_config()
    _setup_logging(config.log_level)

    from focusflow.daemon import FocusFlowDaemon

    daemon = FocusFlowDaemon(config)
    asyncio.run(daemon.run())


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "chat"

    if cmd in ("chat", "repl"):
        _run_cli()
    elif cmd == "serve":
        _run_serve()
    else:
        print("Usage: python -m focusflow [chat|serve]")
        print("  chat   Interactive CLI REPL (default)")
        print("  serve  Headless mode with reminder scheduler")
        sys.exit(1)


if __name__ == "__main__":
    main()
