"""Incremental cache directory management.

This module handles:
- Deriving the cache root and its uploads/image subdirectories
- Resetting them to a known-empty state before each build

Resetting is a reconciliation towards the desired state (two empty
directories), so calling create() repeatedly is safe.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from incremental_cache.errors import FilesystemError
from incremental_cache.types import OutputDir

logger = logging.getLogger(__name__)

CACHE_ROOT_DIR = "incremental-cache"
UPLOADS_DIR = "uploads"
IMAGE_DIR = "image"


def _remove_path(path: Path) -> None:
    """Remove a file, symlink, or directory tree if present.

    Raises:
        FilesystemError: If the path cannot be inspected or removed.
    """
    try:
        if not path.exists() and not path.is_symlink():
            return
    except OSError as e:
        raise FilesystemError(path, "check", str(e)) from e

    logger.debug("Removing %s", path)
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        raise FilesystemError(path, "remove", str(e)) from e


class CacheDirectoryManager:
    """Owns the on-disk incremental cache root.

    Attributes:
        out_dir: Output directory the cache root lives under.
        root: Cache root directory.
        uploads_dir: Directory receiving per-directory tar archives.
        image_dir: Working directory for image construction.
    """

    def __init__(self, out_dir: OutputDir) -> None:
        self.out_dir = out_dir
        self.root = out_dir.get_absolute_path(CACHE_ROOT_DIR)
        self.uploads_dir = self.root / UPLOADS_DIR
        self.image_dir = self.root / IMAGE_DIR

    def create(self) -> None:
        """Reset the cache root to empty uploads and image directories.

        Raises:
            FilesystemError: If removal or creation fails. The cache must not
                be used after this error.
        """
        for path in (self.root, self.image_dir, self.uploads_dir):
            _remove_path(path)

        for path in (self.image_dir, self.uploads_dir):
            try:
                path.mkdir(parents=True)
            except OSError as e:
                raise FilesystemError(path, "create", str(e)) from e

        logger.info("Incremental cache directories ready: %s", self.root)

    def list_uploads(self) -> list[Path]:
        """List uploaded archives in sorted order.

        Raises:
            FilesystemError: If the uploads directory cannot be read.
        """
        try:
            return sorted(p for p in self.uploads_dir.iterdir() if p.is_file())
        except OSError as e:
            raise FilesystemError(self.uploads_dir, "list", str(e)) from e


__all__ = [
    "CACHE_ROOT_DIR",
    "IMAGE_DIR",
    "UPLOADS_DIR",
    "CacheDirectoryManager",
]
