"""Path handling for cache directory fragments.

Cache directories are container-side paths. `~` always means the root
user's home, and COPY sources mark each path segment optional so a
missing directory in the cache image does not fail the build.
"""

from __future__ import annotations

from dataclasses import dataclass

HOME_DIR = "/root"
PATH_SEPARATOR = "/"
ENCODED_SEPARATOR = "%2f"
OPTIONAL_MARKER = "?"
ARCHIVE_SUFFIX = ".tar"


@dataclass(frozen=True)
class PathSegment:
    """A single path component, optionally marked as optional-match."""

    name: str
    optional: bool = False

    def render(self) -> str:
        """Render the segment for a COPY path."""
        if self.optional:
            return f"{self.name}{OPTIONAL_MARKER}"
        return self.name


def normalize_home(path: str) -> str:
    """Replace every `~` in a container path with the root home directory."""
    return path.replace("~", HOME_DIR)


def split_segments(path: str, optional: bool = False) -> list[PathSegment]:
    """Split a path into its non-empty segments.

    Args:
        path: Container path.
        optional: Mark every segment as optional.

    Returns:
        Segments in path order.
    """
    return [
        PathSegment(name=part, optional=optional)
        for part in path.split(PATH_SEPARATOR)
        if part
    ]


def render_segments(segments: list[PathSegment]) -> str:
    """Join segments back into a path."""
    return PATH_SEPARATOR.join(segment.render() for segment in segments)


def optional_path(path: str) -> str:
    """Render a path with every segment optional.

    A leading `/` is dropped since COPY sources resolve against the
    source image root.
    """
    return render_segments(split_segments(path, optional=True))


def archive_file_name(path: str) -> str:
    """Derive the upload archive filename for a container directory."""
    return f"{path.replace(PATH_SEPARATOR, ENCODED_SEPARATOR)}{ARCHIVE_SUFFIX}"


__all__ = [
    "HOME_DIR",
    "PathSegment",
    "archive_file_name",
    "normalize_home",
    "optional_path",
    "render_segments",
    "split_segments",
]
