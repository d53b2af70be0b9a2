from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ProcessRecord:
    """One row of a process listing: pid plus the command that follows it."""

    pid: int
    details: str


class SignalDelivery(Enum):
    """How the OS answered a signal delivery."""

    DELIVERED = "delivered"
    NO_SUCH_PROCESS = "no_such_process"
    NOT_PERMITTED = "not_permitted"


class TerminationOutcome(Enum):
    """Result of one signal-then-wait attempt."""

    TERMINATED = "terminated"
    NOT_PERMITTED = "not_permitted"
    STILL_RUNNING = "still_running"
