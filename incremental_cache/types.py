"""Shared type definitions for incremental_cache.

This module contains dataclasses and type aliases shared across
subpackages to avoid circular imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from incremental_cache.config import Settings

# Container-side directories to persist between builds, in order.
CacheDirectorySpec = Sequence[str]


@dataclass(frozen=True)
class OutputDir:
    """Output directory that build artifacts and the cache root live under.

    Attributes:
        root: Root directory path.
    """

    root: Path

    @classmethod
    def from_settings(cls, settings: Settings) -> OutputDir:
        """Create an output directory from application settings."""
        return cls(root=settings.output_dir)

    def get_absolute_path(self, name: str) -> Path:
        """Return the absolute path of ``name`` under the output root."""
        return (self.root / name).absolute()


@dataclass(frozen=True)
class FileServerConfig:
    """Upload contract of the file server receiving cache archives.

    Only ``upload_url`` and ``access_token`` are consumed by fragment
    generation; the remaining fields describe the server side.

    Attributes:
        upload_url: URL archives are uploaded to from inside the build.
        access_token: Token sent in the upload request header.
        listen_to_ip: Address the server listens on.
        port: Port the server listens on.
        files_dir: Directory the server writes received archives to.
    """

    upload_url: str
    access_token: str
    listen_to_ip: str = "0.0.0.0"
    port: int = 0
    files_dir: Path | None = None


@dataclass
class ImageImportResult:
    """Result of packaging uploaded archives into a cache image."""

    tag: str
    archives: list[Path] = field(default_factory=list)

    @property
    def imported(self) -> bool:
        """Whether any archive was imported."""
        return bool(self.archives)


__all__ = [
    "CacheDirectorySpec",
    "FileServerConfig",
    "ImageImportResult",
    "OutputDir",
]
