"""Incremental cache module.

This module handles:
- Cache directory lifecycle
- Cache image construction and registry lookups
- COPY and upload fragment generation
"""

from incremental_cache.cache.commands import copy_from_image, copy_to_image
from incremental_cache.cache.dirs import CacheDirectoryManager
from incremental_cache.cache.image import (
    CacheImageBuilder,
    RemoteImageExistenceChecker,
)
from incremental_cache.cache.process import ProcessRunner, SubprocessRunner

__all__ = [
    "CacheDirectoryManager",
    "CacheImageBuilder",
    "ProcessRunner",
    "RemoteImageExistenceChecker",
    "SubprocessRunner",
    "copy_from_image",
    "copy_to_image",
]
