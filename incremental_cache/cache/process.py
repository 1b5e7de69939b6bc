"""External process execution for cache image operations.

Image construction and existence checks shell out to the container CLI
through a ProcessRunner, so tests can substitute a fake runner.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from typing import Protocol

from incremental_cache.errors import ProcessLaunchError

logger = logging.getLogger(__name__)


class ProcessRunner(Protocol):
    """Runs an external command to completion and reports its exit status."""

    def run(self, args: Sequence[str], *, quiet: bool = False) -> int:
        """Run a command, blocking until it exits.

        Args:
            args: Command and arguments.
            quiet: Discard the command's stdout and stderr.

        Returns:
            Process exit status.

        Raises:
            ProcessLaunchError: If the command could not be spawned.
        """
        ...


class SubprocessRunner:
    """ProcessRunner backed by subprocess.run."""

    def run(self, args: Sequence[str], *, quiet: bool = False) -> int:
        cmd = list(args)
        logger.debug("Executing: %s", shlex.join(cmd))

        stream = subprocess.DEVNULL if quiet else None
        try:
            result = subprocess.run(
                cmd,
                stdout=stream,
                stderr=stream,
                check=False,
            )
        except OSError as e:
            raise ProcessLaunchError(cmd, str(e)) from e

        return result.returncode


__all__ = ["ProcessRunner", "SubprocessRunner"]
