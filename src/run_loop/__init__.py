"""Instruments process control and directory fingerprinting."""

from .directory import directory_digest, size
from .instruments import Instruments
from .instruments_helpers import LaunchOptions, SignalKind, TerminationOutcome

__all__ = [
    "Instruments",
    "LaunchOptions",
    "SignalKind",
    "TerminationOutcome",
    "directory_digest",
    "size",
]
