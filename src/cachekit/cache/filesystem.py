# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Filesystem cache backend.

Each entry is a flat file ``<root>/<category>/<name>.cache`` holding::

    <edit time or empty>|<pickled payload>

The edit time is a caller-supplied integer used as a cheap version check:
a handle built with an edit time only accepts files stamped with the same
value.  This backend suits data derived from sources with a known
modification date.  There is no locking; concurrent writers to the same
entry race and the last write wins.
"""

from __future__ import annotations

import contextlib
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from cachekit.cache.base import CacheBackend, CacheEntry, EntryInformation, make_listing_key
from cachekit.cache.serialization import PayloadError, deserialize, serialize
from cachekit.core.exceptions import CacheWriteError, UnwritableDirectoryError

logger = logging.getLogger("cachekit.cache.filesystem")

EXTENSION = ".cache"
DELIMITER = b"|"


class FileCache(CacheEntry):
    """Handle on one file-backed cache entry.

    Args:
        backend: The backend owning the storage root.
        category: Category of the entry, used as the directory name.
        name: Name of the entry; ``/`` is replaced by ``_`` in the filename.
        edit_time: Expected edit time.  ``None`` accepts any stored stamp.

    Raises:
        UnwritableDirectoryError: The category directory is missing and
            cannot be created.
    """

    def __init__(
        self,
        backend: FileSystemBackend,
        category: str,
        name: str,
        edit_time: int | None = None,
    ) -> None:
        self._category = category
        self._name = name
        self._edit_time = edit_time
        self._path = backend.get_file_path(category, name)
        self._information: EntryInformation | None = None

        folder = backend.get_category_path(category)
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise UnwritableDirectoryError(folder) from exc

    @property
    def category(self) -> str:
        return self._category

    @property
    def name(self) -> str:
        return self._name

    @property
    def edit_time(self) -> int | None:
        return self._edit_time

    def get_path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # CacheEntry interface
    # ------------------------------------------------------------------

    def get(self) -> tuple[bool, Any]:
        try:
            content = self._path.read_bytes()
        except OSError:
            logger.debug("Cache MISS for %s (no readable file)", self.key)
            return False, None

        stamp, sep, payload = content.partition(DELIMITER)
        if not sep:
            logger.debug("Cache MISS for %s (malformed file)", self.key)
            return False, None

        if self._edit_time is not None:
            try:
                stored_edit_time = int(stamp) if stamp else 0
            except ValueError:
                logger.debug("Cache MISS for %s (malformed stamp)", self.key)
                return False, None
            if stored_edit_time != self._edit_time:
                logger.debug(
                    "Cache MISS for %s (stale: stored %d, expected %d)",
                    self.key,
                    stored_edit_time,
                    self._edit_time,
                )
                return False, None

        try:
            value = deserialize(payload)
        except PayloadError as exc:
            logger.debug("Cache MISS for %s (%s)", self.key, exc)
            return False, None
        logger.debug("Cache HIT for %s", self.key)
        return True, value

    def set(self, value: Any) -> bool:
        stamp = b"" if self._edit_time is None else str(self._edit_time).encode("ascii")
        data = stamp + DELIMITER + serialize(value)
        try:
            self._path.write_bytes(data)
        except OSError as exc:
            raise CacheWriteError(f"Unable to write cache file {self._path}: {exc}") from exc
        self._information = None
        logger.debug("Cached %s (%d bytes)", self.key, len(data))
        return True

    def clear(self) -> bool:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Unable to delete cache file %s: %s", self._path, exc)
            return False
        self._information = None
        return True

    def get_information(self) -> EntryInformation:
        if self._information is None:
            try:
                st = self._path.stat()
            except OSError:
                return EntryInformation()
            self._information = EntryInformation(
                size=st.st_size,
                modified_at=datetime.fromtimestamp(st.st_mtime, tz=UTC),
                created_at=datetime.fromtimestamp(st.st_ctime, tz=UTC),
                accessed_at=datetime.fromtimestamp(st.st_atime, tz=UTC),
            )
        return self._information


class FileSystemBackend(CacheBackend):
    """Cache entries stored as files under *root*.

    Args:
        root: The cache folder; one sub-directory per category.
    """

    identifier = "fs"

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def get_category_path(self, category: str) -> Path:
        """Folder of *category* inside the cache root."""
        return self._root / category

    def get_file_path(self, category: str, name: str) -> Path:
        """Path of the cache file for ``(category, name)``."""
        return self.get_category_path(category) / (name.replace("/", "_") + EXTENSION)

    # ------------------------------------------------------------------
    # CacheBackend interface
    # ------------------------------------------------------------------

    def has_support(self) -> bool:
        return True

    def entry(
        self,
        category: str | None,
        name: str,
        edit_time: int | None = None,
        **options: Any,
    ) -> FileCache:
        if not category:
            raise ValueError("The filesystem cache requires a category")
        if not name:
            raise ValueError("The filesystem cache requires a name")
        if options:
            raise TypeError(f"Unexpected options for the filesystem cache: {sorted(options)}")
        return FileCache(self, category, name, edit_time=edit_time)

    def list_all(self) -> dict[str, FileCache]:
        caches: dict[str, FileCache] = {}
        if not self._root.is_dir():
            return caches
        for category_path in sorted(self._root.iterdir()):
            if not category_path.is_dir():
                continue
            for cache_file in sorted(category_path.iterdir()):
                name = cache_file.name.removesuffix(EXTENSION)
                if not cache_file.is_file() or not name or name == cache_file.name:
                    # Not a cache file
                    continue
                caches[make_listing_key(category_path.name, name)] = FileCache(
                    self, category_path.name, name
                )
        return caches

    def clear_all(self) -> bool:
        caches = self.list_all()
        for cache in caches.values():
            cache.clear()
        if self._root.is_dir():
            for category_path in self._root.iterdir():
                if category_path.is_dir():
                    with contextlib.suppress(OSError):
                        category_path.rmdir()
        logger.info("Filesystem cache cleared: %d entries removed", len(caches))
        return True
