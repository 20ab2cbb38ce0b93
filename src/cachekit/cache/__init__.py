# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache contracts, backends and the backend registry."""

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
    "build_registry",
]
