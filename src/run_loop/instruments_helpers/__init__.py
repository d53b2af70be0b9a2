"""Building blocks behind :class:`run_loop.instruments.Instruments`."""

from .classifier import is_instruments_process
from .launch import LaunchOptions, spawn_arguments
from .models import ProcessRecord, SignalDelivery, TerminationOutcome
from .pid_locator import pids_from_ps_output, pids_from_records, records_from_psutil
from .process_terminator import kill_instruments_process, send_signal, terminate_process
from .process_waiter import process_alive, wait_for_process_to_terminate
from .ps_reader import FIND_PIDS_CMD, INSTRUMENTS_APP_CMD, ps_for_instruments
from .signals import SignalKind, XcodeVersionContext, kill_signal

__all__ = [
    "FIND_PIDS_CMD",
    "INSTRUMENTS_APP_CMD",
    "LaunchOptions",
    "ProcessRecord",
    "SignalDelivery",
    "SignalKind",
    "TerminationOutcome",
    "XcodeVersionContext",
    "is_instruments_process",
    "kill_instruments_process",
    "kill_signal",
    "pids_from_ps_output",
    "pids_from_records",
    "process_alive",
    "ps_for_instruments",
    "records_from_psutil",
    "send_signal",
    "spawn_arguments",
    "terminate_process",
    "wait_for_process_to_terminate",
]
