"""
Debug toggles and the console diagnostic sink.

``DEBUG=1`` turns on console diagnostics for process and directory operations.
``DEBUG_UNIX_CALLS=1`` additionally reports timings of signal waits. Values are
compared literally so a stray value never raises from a diagnostic path.
"""

from __future__ import annotations

import logging

from run_loop.config import env_seconds, env_str

logger = logging.getLogger(__name__)

DEFAULT_TERMINATE_TIMEOUT_SECONDS = 2.0
DEFAULT_WAIT_INTERVAL_SECONDS = 0.1


def debug_enabled() -> bool:
    return env_str("DEBUG") == "1"


def debug_unix_calls_enabled() -> bool:
    return env_str("DEBUG_UNIX_CALLS") == "1"


def debug_log(message: str, *, force: bool = False) -> None:
    """Print ``message`` when debugging is on; always forward it to the module logger."""

    logger.debug(message)
    if force or debug_enabled():
        print(message, flush=True)


def terminate_timeout() -> float:
    """Seconds to wait for a process after each signal."""
    return env_seconds("RUN_LOOP_TERMINATE_TIMEOUT_SECONDS", or_value=DEFAULT_TERMINATE_TIMEOUT_SECONDS)


def wait_interval() -> float:
    return env_seconds("RUN_LOOP_WAIT_INTERVAL_SECONDS", or_value=DEFAULT_WAIT_INTERVAL_SECONDS)


__all__ = [
    "DEFAULT_TERMINATE_TIMEOUT_SECONDS",
    "DEFAULT_WAIT_INTERVAL_SECONDS",
    "debug_enabled",
    "debug_log",
    "debug_unix_calls_enabled",
    "terminate_timeout",
    "wait_interval",
]
