"""Shared fixtures for unit tests."""

import pytest

from stepbridge.shared.config import Settings


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Default settings, isolated from the environment and any .env file."""
    for name in ("BACKTRACE_LIMIT", "LOG_LEVEL", "LOG_REQUESTS"):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None)
