# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""cachekit - pluggable caching with filesystem and shared-memory backends."""

__version__ = "0.1.0"

from cachekit.cache.base import CacheBackend, CacheEntry, EntryInformation
from cachekit.cache.filesystem import FileCache, FileSystemBackend
from cachekit.cache.registry import CacheRegistry, build_registry
from cachekit.cache.shared_memory import SharedMemoryBackend, SharedMemoryCache

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "CacheRegistry",
    "EntryInformation",
    "FileCache",
    "FileSystemBackend",
    "SharedMemoryBackend",
    "SharedMemoryCache",
    "__version__",
    "build_registry",
]
