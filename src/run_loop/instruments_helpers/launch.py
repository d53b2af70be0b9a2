"""Build the argument list used to launch instruments under ``xcrun``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class LaunchOptions:
    """Launch settings for one instruments run."""

    udid: str
    bundle_dir_or_bundle_id: str
    results_dir: str
    script: str
    results_dir_trace: Optional[str] = None
    args: Sequence[str] = field(default_factory=tuple)


def spawn_arguments(automation_template: str, options: LaunchOptions) -> List[str]:
    """Return the arguments that follow ``xcrun`` on the command line."""
    arguments = ["instruments", "-w", options.udid]

    if options.results_dir_trace:
        arguments.extend(["-D", options.results_dir_trace])

    arguments.extend(["-t", automation_template, options.bundle_dir_or_bundle_id])

    for key, value in (("UIARESULTSPATH", options.results_dir), ("UIASCRIPT", options.script)):
        arguments.extend(["-e", key, value])

    arguments.extend(options.args)
    return arguments


__all__ = ["LaunchOptions", "spawn_arguments"]
