"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from run_loop.config import runtime

_ENV_KNOBS = (
    "DEBUG",
    "DEBUG_UNIX_CALLS",
    "RUN_LOOP_TERMINATE_TIMEOUT_SECONDS",
    "RUN_LOOP_WAIT_INTERVAL_SECONDS",
    "RUN_LOOP_PSUTIL_SCAN",
    "RUN_LOOP_LOG_APPEND",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep developer .env files and debug toggles out of the tests."""
    for name in _ENV_KNOBS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(runtime, "_DEFAULT_VALUES", {})
    yield
