"""Minimal view of the active Xcode, enough to pick a kill signal."""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"Xcode\s+(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_xcode_version(output: str) -> Tuple[int, int, int]:
    """Parse ``xcodebuild -version`` output into ``(major, minor, patch)``."""
    match = _VERSION_PATTERN.search(output or "")
    if match is None:
        raise RuntimeError(f"Could not find an Xcode version in {output!r}")
    return tuple(int(part) if part else 0 for part in match.groups())  # type: ignore[return-value]


class XcodeTools:
    """Reads the active Xcode version once, via ``xcrun xcodebuild -version``."""

    def __init__(self) -> None:
        self._version: Optional[Tuple[int, int, int]] = None

    def xcode_version(self) -> Tuple[int, int, int]:
        if self._version is None:
            try:
                completed = subprocess.run(
                    ["xcrun", "xcodebuild", "-version"],
                    capture_output=True,
                    text=True,
                    check=True,
                )
            except (OSError, subprocess.CalledProcessError) as exc:
                raise RuntimeError("Unable to determine the active Xcode version") from exc
            self._version = parse_xcode_version(completed.stdout)
            logger.debug("Active Xcode version: %s", ".".join(str(part) for part in self._version))
        return self._version

    def xcode_version_gte_6(self) -> bool:
        return self.xcode_version() >= (6, 0, 0)


@dataclass(frozen=True)
class FixedXcodeVersion:
    """Version context for callers that already know the answer."""

    gte_6: bool

    def xcode_version_gte_6(self) -> bool:
        return self.gte_6


__all__ = ["FixedXcodeVersion", "XcodeTools", "parse_xcode_version"]
