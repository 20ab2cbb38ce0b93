# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Registry of the cache backends supported by the current environment."""

from __future__ import annotations

import logging

from cachekit.cache.base import CacheBackend
from cachekit.cache.filesystem import FileSystemBackend
from cachekit.cache.shared_memory import SharedMemoryBackend
from cachekit.core.config import Settings
from cachekit.core.exceptions import UnknownCacheError

logger = logging.getLogger("cachekit.cache.registry")


class CacheRegistry:
    """Maps short identifiers (``"fs"``, ``"apc"``) to backends.

    The mapping is computed on first access and reused for the lifetime of
    the registry.  The filesystem backend is always present; the
    shared-memory backend only when its store answers.

    Typical usage::

        registry = CacheRegistry(get_settings())
        for identifier, backend in registry.get_all_caches().items():
            print(identifier, len(backend.list_all()))
    """

    def __init__(
        self,
        settings: Settings,
        *,
        filesystem: FileSystemBackend | None = None,
        shared_memory: SharedMemoryBackend | None = None,
    ) -> None:
        self._settings = settings
        self._filesystem = filesystem or FileSystemBackend(settings.cache_path)
        self._shared_memory = shared_memory or SharedMemoryBackend(
            url=settings.redis_url,
            instance_id=settings.instance_id,
            default_ttl=settings.default_ttl,
            socket_timeout=settings.redis_socket_timeout,
        )
        self._caches: dict[str, CacheBackend] | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def filesystem(self) -> FileSystemBackend:
        return self._filesystem

    @property
    def shared_memory(self) -> SharedMemoryBackend:
        return self._shared_memory

    def get_all_caches(self) -> dict[str, CacheBackend]:
        """Return the supported backends by identifier."""
        if self._caches is None:
            caches: dict[str, CacheBackend] = {
                self._filesystem.identifier: self._filesystem,
            }
            if self._shared_memory.has_support():
                caches[self._shared_memory.identifier] = self._shared_memory
            logger.debug("Supported caches: %s", ", ".join(caches))
            self._caches = caches
        return self._caches

    def get(self, identifier: str) -> CacheBackend:
        """Return the backend registered as *identifier* (case-insensitive).

        Raises:
            UnknownCacheError: No supported backend has this identifier.
        """
        caches = self.get_all_caches()
        backend = caches.get(identifier.lower())
        if backend is None:
            raise UnknownCacheError(identifier, supported=list(caches))
        return backend


def build_registry(settings: Settings | None = None) -> CacheRegistry:
    """Create a :class:`CacheRegistry` from application settings."""
    if settings is None:
        from cachekit.core.config import get_settings

        settings = get_settings()
    return CacheRegistry(settings)
