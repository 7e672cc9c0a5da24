# tests/test_config.py

from __future__ import annotations

import pytest
import structlog
from pydantic import ValidationError

from task_manager.config import Settings, get_settings
from task_manager.server import configure_logging


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("TASKS_HOST", "TASKS_PORT", "TASKS_LOG_LEVEL", "TASKS_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.log_format == "console"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TASKS_PORT", "9090")
    monkeypatch.setenv("TASKS_LOG_FORMAT", "json")

    settings = get_settings()

    assert settings.port == 9090
    assert settings.log_format == "json"


def test_rejects_out_of_range_port(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TASKS_PORT", "70000")

    with pytest.raises(ValidationError):
        get_settings()


def test_configure_logging_picks_renderer(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    try:
        configure_logging(Settings(log_format="json"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

        configure_logging(Settings(log_format="console"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    finally:
        structlog.reset_defaults()
