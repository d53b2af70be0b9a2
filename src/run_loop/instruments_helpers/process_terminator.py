"""Deliver signals to instruments processes and confirm they exit."""

from __future__ import annotations

import logging
from typing import Optional

import psutil

from run_loop.environment import debug_log, terminate_timeout, wait_interval

from .models import SignalDelivery, TerminationOutcome
from .process_waiter import wait_for_process_to_terminate
from .signals import SignalKind

logger = logging.getLogger(__name__)


def send_signal(pid: int, kind: SignalKind) -> SignalDelivery:
    """
    Send ``kind`` to ``pid``.

    Raises:
        OSError: For any failure other than a missing or foreign process
    """
    try:
        psutil.Process(pid).send_signal(kind.value)
    except psutil.NoSuchProcess:
        return SignalDelivery.NO_SUCH_PROCESS
    except psutil.AccessDenied:
        return SignalDelivery.NOT_PERMITTED
    return SignalDelivery.DELIVERED


def terminate_process(pid: int, kind: SignalKind, *, timeout: Optional[float] = None) -> TerminationOutcome:
    """Send one signal, then wait for the process to go away."""
    if timeout is None:
        timeout = terminate_timeout()

    debug_log(f"Sending '{kind.label}' to instruments process '{pid}'")
    delivery = send_signal(pid, kind)

    if delivery is SignalDelivery.NO_SUCH_PROCESS:
        debug_log(f"Process with pid '{pid}' does not exist; nothing to do.")
        return TerminationOutcome.TERMINATED

    # We might not own this process, so there is nothing to reap; only poll.
    if delivery is SignalDelivery.NOT_PERMITTED:
        debug_log(f"Cannot kill process '{pid}' with '{kind.label}'; not a child of this process")

    debug_log(f"Waiting for instruments '{pid}' to terminate")
    if wait_for_process_to_terminate(pid, timeout=timeout, interval=wait_interval()):
        return TerminationOutcome.TERMINATED
    if delivery is SignalDelivery.NOT_PERMITTED:
        return TerminationOutcome.NOT_PERMITTED
    logger.info("Instruments process %s still running %.1fs after %s", pid, timeout, kind.label)
    return TerminationOutcome.STILL_RUNNING


def kill_instruments_process(pid: int, kind: SignalKind) -> bool:
    """Return True if the process with ``pid`` is gone after sending ``kind``."""
    return terminate_process(pid, kind) is TerminationOutcome.TERMINATED


__all__ = ["kill_instruments_process", "send_signal", "terminate_process"]
