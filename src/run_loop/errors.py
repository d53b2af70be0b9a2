"""Error types raised by run_loop."""

from __future__ import annotations


class DirectoryPreconditionError(ValueError):
    """Raised when a directory digest or size request has unusable input."""

    @classmethod
    def missing(cls, path: str) -> "DirectoryPreconditionError":
        return cls(f"Expected '{path}' to exist")

    @classmethod
    def not_a_directory(cls, path: str) -> "DirectoryPreconditionError":
        return cls(f"Expected '{path}' to be a directory")

    @classmethod
    def empty(cls, path: str, entries) -> "DirectoryPreconditionError":
        return cls(f"Expected a non-empty dir at '{path}' found '{entries}'")

    @classmethod
    def invalid_unit(cls, unit, allowed) -> "DirectoryPreconditionError":
        return cls(f"Expected '{unit}' to be one of {', '.join(allowed)}")


class ProcessTerminationTimeoutError(RuntimeError):
    """Raised when a strict wait gives up on a process that is still alive."""

    def __init__(self, pid: int, timeout: float, details: str) -> None:
        super().__init__(f"Waited {timeout} seconds for process '{details}' to terminate")
        self.pid = pid
        self.timeout = timeout
        self.details = details


__all__ = ["DirectoryPreconditionError", "ProcessTerminationTimeoutError"]
