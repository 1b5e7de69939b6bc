"""Error definitions for incremental cache operations.

Every error carries a stable ``code`` for programmatic handling, and a
message naming the path or command that failed.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from pathlib import Path

# Error code constants
FILESYSTEM_ERROR = "filesystem_error"
PROCESS_LAUNCH_ERROR = "process_launch_error"
PROCESS_FAILED = "process_failed"


class IncrementalCacheError(Exception):
    """Base class for incremental cache errors."""

    def __init__(self, message: str, code: str = "incremental_cache_error") -> None:
        super().__init__(message)
        self.code = code


class FilesystemError(IncrementalCacheError):
    """Raised when a cache directory cannot be inspected, removed, or created."""

    def __init__(
        self,
        path: Path,
        operation: str,
        reason: str | None = None,
        code: str = FILESYSTEM_ERROR,
    ) -> None:
        """Initialize FilesystemError.

        Args:
            path: Path the operation was attempted on.
            operation: Short description of the attempted operation.
            reason: Underlying error text, if any.
            code: Error code for structured error handling.
        """
        message = f"Failed to {operation} {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code=code)
        self.path = path
        self.operation = operation


class ProcessLaunchError(IncrementalCacheError):
    """Raised when an external command could not be spawned at all."""

    def __init__(
        self,
        command: Sequence[str],
        reason: str,
        code: str = PROCESS_LAUNCH_ERROR,
    ) -> None:
        super().__init__(f"Failed to launch {shlex.join(command)}: {reason}", code=code)
        self.command = list(command)


class ProcessFailureError(IncrementalCacheError):
    """Raised when an external command ran but exited unsuccessfully."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int,
        code: str = PROCESS_FAILED,
    ) -> None:
        super().__init__(
            f"Command {shlex.join(command)} failed with exit code {exit_code}",
            code=code,
        )
        self.command = list(command)
        self.exit_code = exit_code


__all__ = [
    "FILESYSTEM_ERROR",
    "PROCESS_FAILED",
    "PROCESS_LAUNCH_ERROR",
    "FilesystemError",
    "IncrementalCacheError",
    "ProcessFailureError",
    "ProcessLaunchError",
]
