# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from pyzte.config.log_config import LoggerConfigurator
from pyzte.config.system_config_settings import SystemConfigSettings
from pyzte.startup.startup import StartUp


def test_file_logging_writes_banner(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"
    configurator = LoggerConfigurator(str(log_dir), "pyzte.log", "DEBUG")
    try:
        logging.getLogger("SignalSnapshot").debug("hello from the snapshot")
        for handler in configurator.handlers:
            handler.flush()

        text = configurator.log_file.read_text(encoding="utf-8")
    finally:
        configurator.close()

    assert "==== PyZTE Signal Monitor Starting ====" in text
    assert "[DEBUG] SignalSnapshot: hello from the snapshot" in text


def test_rotate_and_console_handlers(tmp_path: Path) -> None:
    configurator = LoggerConfigurator(tmp_path, "rot.log", "info", to_console=True, rotate=True)
    try:
        assert isinstance(configurator.handlers[0], RotatingFileHandler)
        assert len(configurator.handlers) == 2
        assert logging.getLogger().level == logging.INFO
    finally:
        configurator.close()


def test_close_detaches_handlers(tmp_path: Path) -> None:
    configurator = LoggerConfigurator(tmp_path, "close.log")
    installed = list(configurator.handlers)

    configurator.close()

    root = logging.getLogger()
    assert configurator.handlers == []
    assert all(handler not in root.handlers for handler in installed)


def test_startup_uses_system_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    log_dir = tmp_path / "startup-logs"
    monkeypatch.setattr(SystemConfigSettings, "log_dir", classmethod(lambda cls: str(log_dir)))
    monkeypatch.setattr(SystemConfigSettings, "log_filename", classmethod(lambda cls: "startup.log"))
    monkeypatch.setattr(SystemConfigSettings, "log_level", classmethod(lambda cls: "WARNING"))
    monkeypatch.setattr(SystemConfigSettings, "log_to_console", classmethod(lambda cls: True))

    configurator = StartUp.initialize()
    try:
        assert configurator.log_file == log_dir / "startup.log"
        assert configurator.to_console is True
        assert log_dir.is_dir()
    finally:
        configurator.close()
