# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from pyzte.config.system_config_settings import SystemConfigSettings


class FakeConfigManager:
    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self.reload_called: bool = False

    def get(self, *path: str) -> Any | None:
        key = ".".join(path)
        return self._data.get(key)

    def reload(self) -> None:
        self.reload_called = True


@pytest.fixture(autouse=True)
def _reset_cfg(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Ensure each test starts with a fresh FakeConfigManager.
    """
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager())


def test_history_size_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager({"SignalTracking.history_size": 25}))
    assert SystemConfigSettings.history_size() == 25


def test_history_size_accepts_numeric_string(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager({"SignalTracking.history_size": "40"}))
    assert SystemConfigSettings.history_size() == 40


def test_history_size_missing_uses_default_and_logs_error(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="SystemConfigSettings"):
        size = SystemConfigSettings.history_size()

    assert size == 100
    assert "Missing configuration value for 'SignalTracking.history_size'" in caplog.text


@pytest.mark.parametrize("bad", [0, -5])
def test_history_size_below_one_falls_back(monkeypatch: pytest.MonkeyPatch,
                                           caplog: pytest.LogCaptureFixture, bad: int) -> None:
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager({"SignalTracking.history_size": bad}))

    with caplog.at_level(logging.ERROR, logger="SystemConfigSettings"):
        size = SystemConfigSettings.history_size()

    assert size == 100
    assert "Invalid history size" in caplog.text


def test_history_size_invalid_integer_falls_back(monkeypatch: pytest.MonkeyPatch,
                                                 caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager({"SignalTracking.history_size": "lots"}))

    with caplog.at_level(logging.ERROR, logger="SystemConfigSettings"):
        size = SystemConfigSettings.history_size()

    assert size == 100
    assert "Invalid integer configuration value" in caplog.text


def test_logging_settings_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeConfigManager({
        "logging.log_level": "DEBUG",
        "logging.log_dir": "/var/log/pyzte",
        "logging.log_filename": "signal.log",
        "logging.to_console": "yes",
    })
    monkeypatch.setattr(SystemConfigSettings, "_cfg", fake)

    assert SystemConfigSettings.log_level() == "DEBUG"
    assert SystemConfigSettings.log_dir() == "/var/log/pyzte"
    assert SystemConfigSettings.log_filename() == "signal.log"
    assert SystemConfigSettings.log_to_console() is True


def test_logging_defaults_when_missing() -> None:
    assert SystemConfigSettings.log_level() == "INFO"
    assert SystemConfigSettings.log_dir() == "logs"
    assert SystemConfigSettings.log_filename() == "pyzte.log"
    assert SystemConfigSettings.log_to_console() is False


def test_empty_string_uses_default_and_logs_error(monkeypatch: pytest.MonkeyPatch,
                                                  caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager({"logging.log_level": ""}))

    with caplog.at_level(logging.ERROR, logger="SystemConfigSettings"):
        level = SystemConfigSettings.log_level()

    assert level == "INFO"
    assert "Empty configuration value for 'logging.log_level'" in caplog.text


def test_invalid_bool_uses_default(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager({"logging.to_console": "maybe"}))

    with caplog.at_level(logging.ERROR, logger="SystemConfigSettings"):
        assert SystemConfigSettings.log_to_console() is False

    assert "Invalid boolean configuration value" in caplog.text


def test_initialize_directories_creates_log_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    log_dir = tmp_path / "nested" / "logs"
    monkeypatch.setattr(SystemConfigSettings, "_cfg", FakeConfigManager({"logging.log_dir": str(log_dir)}))

    SystemConfigSettings.initialize_directories()

    assert log_dir.is_dir()


def test_reload_delegates_to_config_manager(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeConfigManager()
    monkeypatch.setattr(SystemConfigSettings, "_cfg", fake)

    SystemConfigSettings.reload()

    assert fake.reload_called is True
