"""Run process-listing queries through the shell."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

FIND_PIDS_CMD = "ps x -o pid,command | grep -v grep | grep instruments"
INSTRUMENTS_APP_CMD = "ps x -o pid,comm | grep Instruments.app | grep -v grep"


def ps_for_instruments(ps_cmd: str = FIND_PIDS_CMD) -> str:
    """
    Execute ``ps_cmd`` and return its stripped standard output.

    A failing pipeline is an ordinary outcome here (``grep`` exits 1 when nothing
    matches), so any failure is reported as empty output.

    Args:
        ps_cmd: Shell command producing ``"<pid> <details>"`` lines

    Returns:
        The command output, or ``""`` when the command failed
    """
    try:
        completed = subprocess.run(
            ps_cmd,
            shell=True,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:  # policy_guard: allow-silent-handler
        logger.debug("Process query %r could not be started: %s", ps_cmd, exc)
        return ""

    if completed.returncode != 0:
        logger.debug("Process query %r exited with %s", ps_cmd, completed.returncode)
        return ""
    return completed.stdout.strip()


__all__ = ["FIND_PIDS_CMD", "INSTRUMENTS_APP_CMD", "ps_for_instruments"]
