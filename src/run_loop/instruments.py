"""
Instruments process control.

Finds running ``instruments`` processes, stops them with a signal suited to the
active Xcode, and launches new runs under ``xcrun``. Only one instruments
process can run at a time; if more are found, each is handled on its own.

Usage:
    from run_loop.instruments import Instruments

    Instruments().kill_instruments()
"""

from __future__ import annotations

import logging
import subprocess
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from run_loop.config import env_bool
from run_loop.environment import debug_log

from .instruments_helpers.launch import LaunchOptions, spawn_arguments
from .instruments_helpers.models import TerminationOutcome
from .instruments_helpers.pid_locator import (
    pids_from_ps_output,
    pids_from_records,
    records_from_psutil,
)
from .instruments_helpers.process_terminator import terminate_process
from .instruments_helpers.ps_reader import (
    FIND_PIDS_CMD,
    INSTRUMENTS_APP_CMD,
    ps_for_instruments,
)
from .instruments_helpers.signals import SignalKind, XcodeVersionContext, kill_signal

logger = logging.getLogger(__name__)


class Instruments:
    """Interact with the instruments command-line tool."""

    def __init__(self, ps_cmd: str = FIND_PIDS_CMD, *, use_psutil: Optional[bool] = None) -> None:
        self.ps_cmd = ps_cmd
        if use_psutil is None:
            use_psutil = bool(env_bool("RUN_LOOP_PSUTIL_SCAN", or_value=False))
        self.use_psutil = use_psutil

    def instruments_pids(self) -> List[int]:
        """Return the ascending pids of running instruments processes."""
        if self.use_psutil:
            return pids_from_records(records_from_psutil())
        return pids_from_ps_output(ps_for_instruments(self.ps_cmd))

    def instruments_running(self) -> bool:
        return len(self.instruments_pids()) > 0

    def kill_instruments(self, xcode_tools: Optional[XcodeVersionContext] = None) -> Dict[int, TerminationOutcome]:
        """
        Stop every running instruments process.

        Each pid gets the graceful signal first and SIGKILL only if it is still
        around afterwards, so a stubborn process costs at most two waits.

        Args:
            xcode_tools: Decides which graceful signal to send; defaults to the
                active Xcode

        Returns:
            The final outcome for each pid that was found
        """
        if xcode_tools is None:
            from .xcode import XcodeTools

            xcode_tools = XcodeTools()

        pids = self.instruments_pids()
        if not pids:
            logger.debug("No instruments processes found")
            return {}

        graceful = kill_signal(xcode_tools)
        outcomes: Dict[int, TerminationOutcome] = {}
        for pid in pids:
            outcome = terminate_process(pid, graceful)
            if outcome is not TerminationOutcome.TERMINATED:
                logger.info("Instruments process %s did not exit after %s; sending KILL", pid, graceful.label)
                outcome = terminate_process(pid, SignalKind.KILL)
            if outcome is not TerminationOutcome.TERMINATED:
                logger.warning("Giving up on instruments process %s (%s)", pid, outcome.value)
            outcomes[pid] = outcome
        return outcomes

    def instruments_app_running(self) -> bool:
        """
        Is the Instruments.app GUI running?

        While it is, the instruments command-line tool cannot take control of
        applications.
        """
        return "Instruments.app" in ps_for_instruments(INSTRUMENTS_APP_CMD)

    def spawn(self, automation_template: str, options: LaunchOptions, log_file: Union[str, Path]) -> int:
        """
        Launch instruments under ``xcrun`` and detach from it.

        Output and errors go to ``log_file``. The child is reaped on a daemon
        thread so that, once it exits, liveness probes see it as gone.

        Returns:
            The process id of the ``xcrun`` process
        """
        command = ["xcrun", *spawn_arguments(automation_template, options)]
        debug_log(f"{' '.join(command)} >& {log_file}")

        with open(log_file, "wb") as log_handle:
            process = subprocess.Popen(
                command,
                stdout=log_handle,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        threading.Thread(target=process.wait, name=f"instruments-reaper-{process.pid}", daemon=True).start()
        logger.info("Spawned instruments with pid %s", process.pid)
        return process.pid


__all__ = ["Instruments"]
