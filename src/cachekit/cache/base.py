# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract cache contracts.

Two levels are defined:

* :class:`CacheEntry` is a handle on one ``(category, name)`` entry and
  supports get/set/clear plus introspection.
* :class:`CacheBackend` is a storage substrate bound to its environment
  (root directory, store client, instance id).  It builds entry handles and
  performs the type-level operations: discovery and wiping.

Neither class holds state; each backend is an independent implementation.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class EntryInformation:
    """Metadata snapshot of a stored entry.

    Fields a backend cannot report are ``None``.
    """

    size: int = 0
    hits: int | None = None
    modified_at: datetime | None = None
    created_at: datetime | None = None
    accessed_at: datetime | None = None
    ttl: int | None = None


def make_listing_key(category: str | None, name: str) -> str:
    """Return ``category.name``, or just ``name`` when there is no category."""
    if category is None:
        return name
    return f"{category}.{name}"


class CacheEntry(abc.ABC):
    """Handle on a single cache entry.

    The stored value may be any picklable object; its type is preserved.
    """

    @abc.abstractmethod
    def get(self) -> tuple[bool, Any]:
        """Retrieve the cached value.

        Returns:
            ``(True, value)`` on a hit, ``(False, None)`` on a miss.  A corrupt
            entry or an unavailable backend is a miss, never an exception.
        """

    @abc.abstractmethod
    def set(self, value: Any) -> bool:
        """Store *value*, overwriting any previous value.

        Returns:
            ``True`` if the value was saved, ``False`` if the backend is
            unavailable.

        Raises:
            CacheWriteError: The storage layer failed to write.
        """

    @abc.abstractmethod
    def clear(self) -> bool:
        """Delete the entry.

        Returns:
            ``True`` in case of success.
        """

    @property
    @abc.abstractmethod
    def category(self) -> str | None:
        """Namespace of the entry, ``None`` for entries created elsewhere."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Key of the entry within its category."""

    @property
    def key(self) -> str:
        """Listing key, ``category.name``."""
        return make_listing_key(self.category, self.name)

    @abc.abstractmethod
    def get_information(self) -> EntryInformation:
        """Return the stored entry's metadata."""

    def get_size(self) -> int:
        """Size in bytes, ``0`` if unknown."""
        return self.get_information().size

    def get_hits(self) -> int | None:
        """Hit count, ``None`` if the backend does not count hits."""
        return self.get_information().hits

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.category!r}, {self.name!r})"


class CacheBackend(abc.ABC):
    """A storage substrate for cache entries."""

    #: Short identifier used by the registry and the CLI.
    identifier: str = ""

    @abc.abstractmethod
    def has_support(self) -> bool:
        """Whether the substrate is usable in the current environment."""

    @abc.abstractmethod
    def entry(self, category: str | None, name: str, **options: Any) -> CacheEntry:
        """Build a handle for ``(category, name)`` without touching its value."""

    @abc.abstractmethod
    def list_all(self) -> dict[str, CacheEntry]:
        """Return handles for every entry currently stored, by listing key."""

    @abc.abstractmethod
    def clear_all(self) -> bool:
        """Delete every entry of this backend.

        Returns:
            ``True`` in case of success.
        """
