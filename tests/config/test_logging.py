from __future__ import annotations

import logging

import pytest

from gymdesk.config import ConfigurationError, configure_logging, get_log_level
from gymdesk.config.logging import LOG_LEVEL_ENV_VAR


def test_log_level_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)

    assert get_log_level() == logging.INFO


def test_log_level_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")

    assert get_log_level() == logging.DEBUG


def test_unknown_log_level_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "LOUD")

    with pytest.raises(ConfigurationError):
        get_log_level()


def test_configure_logging_passes_level_through(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    configure_logging(level=logging.WARNING, force=True)

    assert captured["level"] == logging.WARNING
    assert captured["force"] is True
