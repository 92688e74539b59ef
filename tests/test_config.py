"""Tests for configuration loading."""

import pytest
from pathlib import Path

from focusflow.config import load_config

_ENV_KEYS = [
    "FOCUSFLOW_DATA_DIR",
    "FOCUSFLOW_EXPORT_DIR",
    "FOCUSFLOW_REMINDER_INTERVAL",
    "FOCUSFLOW_MONOTONIC_COMPLETION",
    "FOCUSFLOW_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfig:
    def test_defaults(self):
        config = load_config()
        assert config.scheduler.reminder_interval == 60
        assert config.tasks.monotonic_completion is False
        assert config.storage.data_dir.name == "data"
        assert config.log_level == "INFO"

    def test_env_override(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("FOCUSFLOW_DATA_DIR", str(tmp_path / "store"))
        monkeypatch.setenv("FOCUSFLOW_REMINDER_INTERVAL", "5")
        monkeypatch.setenv("FOCUSFLOW_MONOTONIC_COMPLETION", "yes")

        config = load_config()
        assert config.storage.data_dir == tmp_path / "store"
        assert config.scheduler.reminder_interval == 5
        assert config.tasks.monotonic_completion is True

    def test_toml_file(self, tmp_path: Path):
        toml_path = tmp_path / "focusflow.toml"
        toml_path.write_text("""
log_level = "DEBUG"

[storage]
data_dir = "/var/lib/focusflow"

[scheduler]
reminder_interval = 30

[tasks]
monotonic_completion = true
""")
        config = load_config(toml_path)
        assert config.storage.data_dir == Path("/var/lib/focusflow")
        assert config.scheduler.reminder_interval == 30
        assert config.tasks.monotonic_completion is True
        assert config.log_level == "DEBUG"

    def test_toml_in_cwd_is_found(self, tmp_path: Path):
        (tmp_path / "focusflow.toml").write_text("[scheduler]\nreminder_interval = 15\n")
        config = load_config()
        assert config.scheduler.reminder_interval == 15

    def test_env_overrides_toml(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("FOCUSFLOW_REMINDER_INTERVAL", "90")

        toml_path = tmp_path / "focusflow.toml"
        toml_path.write_text("""
[scheduler]
reminder_interval = 30
""")
        config = load_config(toml_path)
        assert config.scheduler.reminder_interval == 90  # env wins

    def test_bad_interval_fails_fast(self, monkeypatch):
        monkeypatch.setenv("FOCUSFLOW_REMINDER_INTERVAL", "soon")
        with pytest.raises(ValueError):
            load_config()
