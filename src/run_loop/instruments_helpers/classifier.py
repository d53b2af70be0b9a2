"""Decide whether a process description belongs to the instruments tool."""

from __future__ import annotations

from typing import Optional

# ``ps x -o pid,command | grep -v grep | grep instruments`` typically shows:
#
#   98081 sh -c xcrun instruments -w "43be3f89d9587e9468c24672777ff6241bd91124" < args >
#   98082 /Xcode/6.0.1/Xcode.app/Contents/Developer/usr/bin/instruments -w < args >
#
# Only the second line shows up when the caller launched instruments directly.
INSTRUMENTS_BINARY_PATTERN = "/usr/bin/instruments"
SHELL_WRAPPER_PATTERN = "sh -c xcrun instruments"

INSTRUMENTS_PATTERNS = (INSTRUMENTS_BINARY_PATTERN, SHELL_WRAPPER_PATTERN)


def is_instruments_process(ps_details: Optional[str]) -> bool:
    """Return True if ``ps_details`` (a command without its pid) describes instruments."""
    if not ps_details:
        return False
    return any(pattern in ps_details for pattern in INSTRUMENTS_PATTERNS)


__all__ = [
    "INSTRUMENTS_BINARY_PATTERN",
    "INSTRUMENTS_PATTERNS",
    "SHELL_WRAPPER_PATTERN",
    "is_instruments_process",
]
