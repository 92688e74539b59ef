"""Configuration loading from environment variables and focusflow.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_HOME_DIR = Path.home() / ".focusflow"
_DEFAULT_DATA_DIR = _HOME_DIR / "data"
_DEFAULT_EXPORT_DIR = _HOME_DIR / "daily"
_CONFIG_FILENAME = "focusflow.toml"

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    return value.strip().lower() in _TRUTHY


@dataclass
class StorageConfig:
    """Where the journal and tasks are kept."""

    data_dir: Path = _DEFAULT_DATA_DIR
    export_dir: Path = _DEFAULT_EXPORT_DIR


@dataclass
class SchedulerConfig:
    """Reminder scheduler configuration."""

    reminder_interval: float = 60


@dataclass
class TasksConfig:
    """Task behaviour switches."""

    # When true, a completed task can no longer be toggled back to pending.
    monotonic_completion: bool = False


@dataclass
class FocusFlowConfig:
    """Top-level FocusFlow configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    tasks: TasksConfig = field(default_factory=TasksConfig)
    pid_file: Path = _HOME_DIR / "focusflow.pid"
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> FocusFlowConfig:
    """Load configuration from environment variables and optional focusflow.toml.

    Priority: environment variables > focusflow.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.focusflow/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _HOME_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    storage_data = file_data.get("storage", {})
    scheduler_data = file_data.get("scheduler", {})
    tasks_data = file_data.get("tasks", {})

    config = FocusFlowConfig(
        storage=StorageConfig(
            data_dir=Path(
                os.getenv("FOCUSFLOW_DATA_DIR", storage_data.get("data_dir", str(_DEFAULT_DATA_DIR)))
            ).expanduser(),
            export_dir=Path(
                os.getenv(
                    "FOCUSFLOW_EXPORT_DIR", storage_data.get("export_dir", str(_DEFAULT_EXPORT_DIR))
                )
            ).expanduser(),
        ),
        scheduler=SchedulerConfig(
            reminder_interval=float(
                os.getenv(
                    "FOCUSFLOW_REMINDER_INTERVAL", scheduler_data.get("reminder_interval", 60)
                )
            ),
        ),
        tasks=TasksConfig(
            monotonic_completion=_as_bool(
                os.getenv(
                    "FOCUSFLOW_MONOTONIC_COMPLETION",
                    tasks_data.get("monotonic_completion", False),
                )
            ),
        ),
        pid_file=Path(file_data.get("pid_file", str(_HOME_DIR / "focusflow.pid"))).expanduser(),
        log_level=os.getenv("FOCUSFLOW_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
