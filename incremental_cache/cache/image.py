"""Cache image construction and registry lookups.

This module handles:
- Packaging uploaded archives into a tagged cache image via `docker import`
- Checking whether a cache image tag exists in a remote registry

Importing each archive with `docker import` is much faster than building
the image in-process or from a generated Dockerfile.
"""

from __future__ import annotations

import logging

from incremental_cache.cache.dirs import CacheDirectoryManager
from incremental_cache.cache.process import ProcessRunner, SubprocessRunner
from incremental_cache.errors import ProcessFailureError
from incremental_cache.types import ImageImportResult

logger = logging.getLogger(__name__)

DEFAULT_DOCKER_COMMAND = "docker"


class CacheImageBuilder:
    """Creates the incremental cache image from uploaded archives."""

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        docker_command: str = DEFAULT_DOCKER_COMMAND,
    ) -> None:
        self.runner = runner or SubprocessRunner()
        self.docker_command = docker_command

    def create_image(
        self,
        cache_dirs: CacheDirectoryManager,
        tag: str,
    ) -> ImageImportResult:
        """Import every uploaded archive as a filesystem image tagged ``tag``.

        Imports run one at a time in archive name order and stop at the
        first failure. Each import replaces the image under ``tag``, so with
        several archives only the last one is guaranteed to be visible.

        Args:
            cache_dirs: Cache directories holding the uploaded archives.
            tag: Image tag to apply.

        Returns:
            ImageImportResult listing the imported archives.

        Raises:
            FilesystemError: If the uploads directory cannot be read.
            ProcessLaunchError: If `docker import` could not be spawned.
            ProcessFailureError: If `docker import` exited unsuccessfully.
        """
        result = ImageImportResult(tag=tag)
        archives = cache_dirs.list_uploads()
        if not archives:
            logger.warning(
                "No archives in %s, incremental cache image not created",
                cache_dirs.uploads_dir,
            )
            return result

        for archive in archives:
            cmd = [self.docker_command, "import", str(archive), tag]
            exit_code = self.runner.run(cmd)
            if exit_code != 0:
                logger.error("Creating incremental cache image failed: %s", archive)
                raise ProcessFailureError(cmd, exit_code)
            result.archives.append(archive)

        logger.info("Incremental cache image created: %s", tag)
        return result


class RemoteImageExistenceChecker:
    """Checks the registry for an existing incremental cache image."""

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        docker_command: str = DEFAULT_DOCKER_COMMAND,
    ) -> None:
        self.runner = runner or SubprocessRunner()
        self.docker_command = docker_command

    def image_exists(self, tag: str) -> bool:
        """Check whether ``tag`` exists in its registry.

        Any unsuccessful inspection, including authentication or network
        failures, is reported as not existing.

        Raises:
            ProcessLaunchError: If `docker manifest inspect` could not be spawned.
        """
        cmd = [self.docker_command, "manifest", "inspect", tag]
        exists = self.runner.run(cmd, quiet=True) == 0
        logger.debug("Incremental cache image %s exists: %s", tag, exists)
        return exists


__all__ = [
    "DEFAULT_DOCKER_COMMAND",
    "CacheImageBuilder",
    "RemoteImageExistenceChecker",
]
