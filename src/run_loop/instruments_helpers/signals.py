"""Signals sent to instruments and the policy for choosing the graceful one."""

from __future__ import annotations

import signal
from enum import Enum
from typing import Protocol


class SignalKind(Enum):
    QUIT = signal.SIGQUIT
    TERM = signal.SIGTERM
    KILL = signal.SIGKILL
    PROBE = 0

    @property
    def label(self) -> str:
        return self.name if self is not SignalKind.PROBE else "0"


class XcodeVersionContext(Protocol):
    """Anything that can tell whether the active Xcode is 6.0 or newer."""

    def xcode_version_gte_6(self) -> bool: ...


def kill_signal(xcode_tools: XcodeVersionContext) -> SignalKind:
    """
    Choose the graceful signal for the active Xcode.

    Against iOS 8 devices, TERM (or KILL) makes the device-side ScriptAgent log
    sandbox access errors for UniqueDeviceID until the device is rebooted. QUIT
    avoids that but only Xcode 6 and later honor it.
    """
    return SignalKind.QUIT if xcode_tools.xcode_version_gte_6() else SignalKind.TERM


__all__ = ["SignalKind", "XcodeVersionContext", "kill_signal"]
