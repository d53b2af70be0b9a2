"""Turn process listings into sorted, de-duplicated instruments pids."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import psutil

from .classifier import is_instruments_process
from .models import ProcessRecord

logger = logging.getLogger(__name__)


def parse_ps_line(line: str) -> Optional[ProcessRecord]:
    """Parse ``"<pid> <details...>"``; blank lines and non-positive or non-numeric pids yield None."""
    tokens = line.split()
    if not tokens:
        return None
    try:
        pid = int(tokens[0])
    except ValueError:
        logger.debug("Ignoring process listing line without a pid: %r", line)
        return None
    # 0 and negative pids address process groups when signalled
    if pid <= 0:
        logger.debug("Ignoring process listing line with non-positive pid: %r", line)
        return None
    return ProcessRecord(pid=pid, details=" ".join(tokens[1:]))


def records_from_ps_output(ps_output: Optional[str]) -> List[ProcessRecord]:
    if not ps_output:
        return []
    records = []
    for line in ps_output.splitlines():
        record = parse_ps_line(line.strip())
        if record is not None:
            records.append(record)
    return records


def pids_from_records(records: Iterable[ProcessRecord]) -> List[int]:
    """Return the ascending, unique pids of records that describe instruments."""
    return sorted({record.pid for record in records if is_instruments_process(record.details)})


def pids_from_ps_output(ps_output: Optional[str]) -> List[int]:
    """
    Extract instruments pids from ``ps`` style output.

    Args:
        ps_output: Lines of ``"<pid> <command...>"``

    Returns:
        Sorted pids without duplicates; empty when nothing matches
    """
    return pids_from_records(records_from_ps_output(ps_output))


def records_from_psutil() -> List[ProcessRecord]:
    """
    Enumerate live processes through psutil instead of parsing ``ps`` text.

    ``process_iter`` already drops processes that vanish mid-scan and reports
    an unreadable command line as None, which becomes empty details here.
    """
    records: List[ProcessRecord] = []
    for proc in psutil.process_iter(["pid", "cmdline"]):
        pid = proc.info["pid"]
        if pid <= 0:
            continue
        cmdline = proc.info.get("cmdline") or []
        records.append(ProcessRecord(pid=pid, details=" ".join(cmdline)))
    return records


__all__ = [
    "parse_ps_line",
    "pids_from_ps_output",
    "pids_from_records",
    "records_from_ps_output",
    "records_from_psutil",
]
