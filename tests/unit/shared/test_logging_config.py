"""Unit tests for logging configuration."""

import logging
from typing import Any

import pytest

from stepbridge.shared.logging_config import configure_logging


@pytest.fixture
def basic_config_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    return calls


def test_level_name_is_resolved(basic_config_calls: list[dict[str, Any]]) -> None:
    """Test level names are case insensitive."""
    configure_logging("debug")
    assert basic_config_calls[0]["level"] == logging.DEBUG


def test_unknown_level_falls_back_to_info(basic_config_calls: list[dict[str, Any]]) -> None:
    """Test an unknown level name does not break startup."""
    configure_logging("LOUD")
    assert basic_config_calls[0]["level"] == logging.INFO


def test_format_includes_logger_name(basic_config_calls: list[dict[str, Any]]) -> None:
    """Test records show the emitting module."""
    configure_logging()
    assert "%(name)s" in basic_config_calls[0]["format"]
