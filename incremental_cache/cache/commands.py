"""Build fragment generation for the incremental cache.

This module produces the text embedded verbatim into build scripts:
- COPY instructions restoring cached directories from the cache image
- Shell lines archiving, uploading, and removing directories after a build

Generation is pure; nothing here touches the filesystem or runs commands.
"""

from __future__ import annotations

from incremental_cache.cache.paths import (
    archive_file_name,
    normalize_home,
    optional_path,
)
from incremental_cache.types import CacheDirectorySpec, FileServerConfig

UPLOAD_RETRY_COUNT = 3
ACCESS_TOKEN_HEADER = "t"


def _guard(directory: str, command: str) -> str:
    """Wrap a command so it only runs when the directory exists."""
    return f'if [ -d "{directory}" ]; then {command}; fi'


def copy_to_image(
    dirs: CacheDirectorySpec | None,
    image_ref: str,
) -> list[str]:
    """Produce COPY instructions restoring cached directories into the build.

    Args:
        dirs: Container directories to restore.
        image_ref: Incremental cache image to copy from.

    Returns:
        One COPY instruction per directory; empty if there are no directories.
    """
    if not dirs:
        return []

    commands: list[str] = []
    for directory in dirs:
        target = normalize_home(directory)
        commands.append(f"COPY --from={image_ref} {optional_path(target)} {target}")
    return commands


def copy_from_image(
    dirs: CacheDirectorySpec | None,
    file_server_config: FileServerConfig | None,
) -> list[str]:
    """Produce shell lines moving cached directories out of the build.

    Each directory gets three lines, in order: archive it, upload the
    archive to the file server, then remove the directory. All three are
    no-ops when the directory does not exist.

    Args:
        dirs: Container directories to cache.
        file_server_config: Upload destination; None disables uploads.

    Returns:
        Shell lines; empty if there are no directories or no file server.
    """
    if not dirs or file_server_config is None:
        return []

    upload_url = file_server_config.upload_url
    access_token = file_server_config.access_token

    commands: list[str] = []
    for directory in dirs:
        source = normalize_home(directory)
        archive = archive_file_name(source)
        commands.extend(
            [
                _guard(source, f"tar -cf {archive} {source}") + ";",
                _guard(
                    source,
                    f"curl -v -T {archive} {upload_url}"
                    f' --header "{ACCESS_TOKEN_HEADER}:{access_token}"'
                    f" --retry {UPLOAD_RETRY_COUNT} --retry-all-errors",
                )
                + ";",
                _guard(source, f"rm -rf {source}"),
            ]
        )
    return commands


__all__ = [
    "ACCESS_TOKEN_HEADER",
    "UPLOAD_RETRY_COUNT",
    "copy_from_image",
    "copy_to_image",
]
