# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared-memory cache backend on a host-wide Redis store.

This backend suits perishable data: entries may carry a TTL and the store
expires them on its own.  Keys follow the convention::

    <category>.<name>[@<instance id>]

Instance-scoped keys (the default) carry the suffix so that several
deployments sharing one store do not collide.  The store is probed once per
backend; when it is unreachable every read is a miss and every write
returns ``False``.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from datetime import UTC, datetime, timedelta
from typing import Any

import redis
from redis.exceptions import RedisError

from cachekit.cache.base import CacheBackend, CacheEntry, EntryInformation, make_listing_key
from cachekit.cache.serialization import PayloadError, deserialize, serialize
from cachekit.core.exceptions import CacheCapabilityError, CacheWriteError

logger = logging.getLogger("cachekit.cache.shared_memory")

_KEY_PATTERN = re.compile(r"^(.+?)(?:@([^@\n]+))?$")


def build_key(category: str | None, name: str, instance_id: str | None) -> str:
    """Return the store key for an entry; *instance_id* ``None`` means global."""
    key = make_listing_key(category, name)
    if instance_id is not None:
        key = f"{key}@{instance_id}"
    return key


def parse_key(key: str) -> tuple[str | None, str, str | None]:
    """Split a store key into ``(category, name, instance_id)``.

    Keys without a ``.`` were not created by cachekit; they come back with a
    ``None`` category.
    """
    match = _KEY_PATTERN.match(key)
    if match is None:
        return None, key, None
    base, instance_id = match.group(1), match.group(2)
    category, sep, name = base.partition(".")
    if not sep or not name:
        return None, base, instance_id
    return category, name, instance_id


def _information_from(results: list[Any]) -> EntryInformation:
    """Build metadata from ``MEMORY USAGE``, ``TTL``, ``OBJECT IDLETIME``, ``OBJECT FREQ``."""
    memory, ttl, idle, freq = (None if isinstance(r, Exception) else r for r in results)
    accessed_at = None
    if idle is not None:
        accessed_at = datetime.now(tz=UTC) - timedelta(seconds=int(idle))
    return EntryInformation(
        size=int(memory or 0),
        hits=int(freq) if freq is not None else None,
        accessed_at=accessed_at,
        ttl=int(ttl) if ttl is not None and int(ttl) > 0 else None,
    )


def _queue_information(pipe: Any, key: str | bytes) -> None:
    pipe.memory_usage(key)
    pipe.ttl(key)
    pipe.object("idletime", key)
    pipe.object("freq", key)


class SharedMemoryCache(CacheEntry):
    """Handle on one entry of the shared store.

    Args:
        backend: The backend owning the store client.
        category: Category of the entry, ``None`` for foreign entries.
        name: Name of the entry.
        ttl: Time-to-live in seconds; ``None`` or ``0`` means no expiry.
        global_scope: Share the entry across instances instead of suffixing
            the key with the instance id.
    """

    def __init__(
        self,
        backend: SharedMemoryBackend,
        category: str | None,
        name: str,
        ttl: int | None = None,
        global_scope: bool = False,
    ) -> None:
        self._backend = backend
        self._category = category
        self._name = name
        self._ttl = ttl
        self._global_scope = global_scope
        self._store_key: str | bytes = build_key(
            category, name, None if global_scope else backend.instance_id
        )
        self._information: EntryInformation | None = None

    @classmethod
    def from_store_key(
        cls,
        backend: SharedMemoryBackend,
        store_key: str | bytes,
        category: str | None,
        name: str,
        instance_id: str | None = None,
    ) -> SharedMemoryCache:
        """Build a handle for a key found in the store, keeping the key verbatim."""
        cache = cls(backend, category, name, global_scope=instance_id is None)
        cache._store_key = store_key
        return cache

    @property
    def category(self) -> str | None:
        return self._category

    @property
    def name(self) -> str:
        return self._name

    @property
    def ttl(self) -> int | None:
        return self._ttl

    @property
    def global_scope(self) -> bool:
        return self._global_scope

    @property
    def store_key(self) -> str | bytes:
        return self._store_key

    # ------------------------------------------------------------------
    # CacheEntry interface
    # ------------------------------------------------------------------

    def get(self) -> tuple[bool, Any]:
        if not self._backend.has_support():
            return False, None
        try:
            fetched = self._backend.client.get(self._store_key)
        except RedisError as exc:
            logger.warning("Cache MISS for %s (store error: %s)", self.key, exc)
            return False, None
        if fetched is None:
            logger.debug("Cache MISS for %s", self.key)
            return False, None
        try:
            value = deserialize(fetched)
        except PayloadError as exc:
            logger.debug("Cache MISS for %s (%s)", self.key, exc)
            return False, None
        logger.debug("Cache HIT for %s", self.key)
        return True, value

    def set(self, value: Any) -> bool:
        if not self._backend.has_support():
            return False
        ttl = self._ttl or 0
        data = serialize(value)
        try:
            if ttl > 0:
                result = self._backend.client.set(self._store_key, data, ex=ttl)
            else:
                result = self._backend.client.set(self._store_key, data)
        except RedisError as exc:
            raise CacheWriteError(f"Unable to store cache entry {self.key}: {exc}") from exc
        self._information = None
        logger.debug("Cached %s (ttl=%s)", self.key, ttl)
        return bool(result)

    def clear(self) -> bool:
        if not self._backend.has_support():
            return False
        try:
            self._backend.client.delete(self._store_key)
        except RedisError as exc:
            logger.warning("Unable to delete cache entry %s: %s", self.key, exc)
            return False
        self._information = None
        return True

    def get_information(self) -> EntryInformation:
        """Return store metadata for the entry.

        Raises:
            CacheCapabilityError: The store is not reachable.
        """
        if self._information is None:
            if not self._backend.has_support():
                raise CacheCapabilityError(
                    "The shared-memory store is required to get information about cache"
                )
            try:
                pipe = self._backend.client.pipeline(transaction=False)
                _queue_information(pipe, self._store_key)
                results = pipe.execute(raise_on_error=False)
            except RedisError as exc:
                raise CacheCapabilityError(
                    f"Unable to get information about cache {self.key}: {exc}"
                ) from exc
            self._information = _information_from(results)
        return self._information

    def _set_information(self, information: EntryInformation) -> SharedMemoryCache:
        self._information = information
        return self


class SharedMemoryBackend(CacheBackend):
    """Cache entries stored in a Redis database shared by the host.

    Args:
        client: A ready Redis client; built from *url* on first use if omitted.
        url: Redis connection URL.  Empty disables the backend.
        instance_id: Identifier of this deployment for instance-scoped keys.
        default_ttl: TTL applied to entries built without one.
        socket_timeout: Socket timeout in seconds for the built client.
    """

    identifier = "apc"

    def __init__(
        self,
        client: redis.Redis | None = None,
        *,
        url: str = "",
        instance_id: str = "default",
        default_ttl: int = 0,
        socket_timeout: float = 1.0,
    ) -> None:
        self._client = client
        self._url = url
        self._instance_id = instance_id
        self._default_ttl = default_ttl
        self._socket_timeout = socket_timeout
        self._supported: bool | None = None

    @property
    def instance_id(self) -> str:
        return self._instance_id

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(
                self._url,
                socket_timeout=self._socket_timeout,
                socket_connect_timeout=self._socket_timeout,
            )
        return self._client

    # ------------------------------------------------------------------
    # CacheBackend interface
    # ------------------------------------------------------------------

    def has_support(self) -> bool:
        if self._supported is None:
            self._supported = self._probe()
        return self._supported

    def _probe(self) -> bool:
        if self._client is None and not self._url:
            logger.debug("Shared-memory cache disabled: no store URL configured")
            return False
        try:
            supported = bool(self.client.ping())
        except (RedisError, ValueError) as exc:
            logger.debug("Shared-memory store unavailable: %s", exc)
            return False
        logger.debug("Shared-memory store available (supported=%s)", supported)
        return supported

    def entry(
        self,
        category: str | None,
        name: str,
        ttl: int | None = None,
        global_scope: bool = False,
        **options: Any,
    ) -> SharedMemoryCache:
        if options:
            raise TypeError(f"Unexpected options for the shared-memory cache: {sorted(options)}")
        if ttl is None:
            ttl = self._default_ttl
        return SharedMemoryCache(self, category, name, ttl=ttl, global_scope=global_scope)

    def list_all(self) -> dict[str, SharedMemoryCache]:
        """Return handles for the store's entries visible to this instance.

        Entries suffixed with another instance id are skipped.  Entries whose
        key lacks a category surface with ``category=None``.  Handles are keyed
        by listing key, or by stored key when an instance entry and a global
        entry share the same listing key.

        Raises:
            CacheCapabilityError: The store is not reachable.
        """
        if not self.has_support():
            raise CacheCapabilityError("The shared-memory store is required to list all caches")

        listed: list[tuple[str, SharedMemoryCache]] = []
        try:
            for raw_key in self.client.scan_iter():
                text = raw_key.decode("utf-8", errors="replace") if isinstance(raw_key, bytes) else raw_key
                category, name, instance_id = parse_key(text)
                if instance_id and instance_id != self._instance_id:
                    # Ignore caches from another instance
                    continue
                cache = SharedMemoryCache.from_store_key(self, raw_key, category, name, instance_id)
                listed.append((text, cache))

            results: list[Any] = []
            if listed:
                pipe = self.client.pipeline(transaction=False)
                for _, cache in listed:
                    _queue_information(pipe, cache.store_key)
                results = pipe.execute(raise_on_error=False)
        except RedisError as exc:
            raise CacheCapabilityError(f"Unable to list shared-memory caches: {exc}") from exc

        shared = Counter(cache.key for _, cache in listed)
        caches: dict[str, SharedMemoryCache] = {}
        for index, (text, cache) in enumerate(listed):
            cache._set_information(_information_from(results[index * 4 : index * 4 + 4]))
            caches[cache.key if shared[cache.key] == 1 else text] = cache
        return caches

    def clear_all(self) -> bool:
        """Flush the whole store database, including keys cachekit did not create."""
        if not self.has_support():
            return False
        try:
            self.client.flushdb()
        except RedisError as exc:
            logger.warning("Unable to flush shared-memory cache: %s", exc)
            return False
        logger.info("Shared-memory cache flushed")
        return True
