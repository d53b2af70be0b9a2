"""Poll a pid until the process it names has gone away."""

from __future__ import annotations

import logging
import time

import psutil

from run_loop.environment import (
    DEFAULT_TERMINATE_TIMEOUT_SECONDS,
    DEFAULT_WAIT_INTERVAL_SECONDS,
    debug_enabled,
    debug_log,
    debug_unix_calls_enabled,
)
from run_loop.errors import ProcessTerminationTimeoutError

logger = logging.getLogger(__name__)


def process_alive(pid: int) -> bool:
    """
    Probe ``pid`` with signal 0.

    A process owned by someone else still counts as alive.
    """
    return psutil.pid_exists(pid)


def describe_process(pid: int) -> str:
    """Return ``"<pid> <name>"`` for error messages, or just the pid if it is unreadable."""
    try:
        return f"{pid} {psutil.Process(pid).name()}"
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):  # policy_guard: allow-silent-handler
        return str(pid)


def wait_for_process_to_terminate(
    pid: int,
    *,
    timeout: float = DEFAULT_TERMINATE_TIMEOUT_SECONDS,
    interval: float = DEFAULT_WAIT_INTERVAL_SECONDS,
    raise_on_no_terminate: bool = False,
) -> bool:
    """
    Wait for the process with ``pid`` to terminate.

    Args:
        pid: The process to wait on
        timeout: How long to wait in seconds
        interval: Polling interval in seconds
        raise_on_no_terminate: Raise instead of returning False on timeout

    Returns:
        True once the process is gone, False if it outlived ``timeout``

    Raises:
        ProcessTerminationTimeoutError: If the process is still alive and
            ``raise_on_no_terminate`` is set
    """
    start = time.monotonic()
    poll_until = start + timeout
    has_terminated = False
    while True:
        has_terminated = not process_alive(pid)
        if has_terminated or time.monotonic() >= poll_until:
            break
        time.sleep(interval)

    elapsed = time.monotonic() - start
    logger.debug("Waited %.3f seconds for process %s to terminate (terminated=%s)", elapsed, pid, has_terminated)
    if debug_enabled() or debug_unix_calls_enabled():
        debug_log(f"Waited for {elapsed:.3f} seconds for instruments with '{pid}' to terminate", force=True)

    if raise_on_no_terminate and not has_terminated:
        raise ProcessTerminationTimeoutError(pid, timeout, describe_process(pid))
    return has_terminated


__all__ = ["describe_process", "process_alive", "wait_for_process_to_terminate"]
