"""Incremental Cache - on-disk staging for container build caches.

This package stages directory snapshots produced inside a container build,
packages them into a minimal cache image, and generates the Dockerfile and
shell fragments that move cached directories into and out of a build.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
