# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for cachekit.

A cache *miss* is never an exception; these cover the cases where the
caller must be able to tell "the entry does not exist" apart from "the
storage layer is broken".
"""


class CachekitError(Exception):
    """Base exception for all cachekit errors."""


class ConfigurationError(CachekitError):
    """Invalid or missing configuration."""


class CacheError(CachekitError):
    """Error raised by a cache backend."""


class CacheWriteError(CacheError):
    """Failed to write a cache entry to storage."""


class UnwritableDirectoryError(CacheWriteError):
    """A category directory could not be created."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Unable to create cache directory: {path}")
        self.path = path


class CacheCapabilityError(CacheError):
    """The backing store lacks a capability needed for this operation."""


class UnknownCacheError(CachekitError, ValueError):
    """No backend is registered under the requested identifier."""

    def __init__(self, identifier: str, supported: list[str] | None = None) -> None:
        super().__init__(f'Non-supported cache "{identifier}" provided')
        self.identifier = identifier
        self.supported = supported or []
