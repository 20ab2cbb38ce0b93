# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the cache registry."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fakes import FakeRedis

from cachekit.cache.filesystem import FileSystemBackend
from cachekit.cache.registry import CacheRegistry, build_registry
from cachekit.cache.shared_memory import SharedMemoryBackend
from cachekit.core.config import Settings
from cachekit.core.exceptions import UnknownCacheError


class TestCacheRegistry:
    def test_filesystem_always_registered(self, fs_only_registry: CacheRegistry) -> None:
        caches = fs_only_registry.get_all_caches()
        assert list(caches) == ["fs"]
        assert isinstance(caches["fs"], FileSystemBackend)

    def test_shared_memory_registered_when_supported(self, registry: CacheRegistry) -> None:
        caches = registry.get_all_caches()
        assert list(caches) == ["fs", "apc"]
        assert isinstance(caches["apc"], SharedMemoryBackend)

    def test_shared_memory_omitted_when_unreachable(
        self, settings: Settings, fake_redis: FakeRedis
    ) -> None:
        fake_redis.available = False
        registry = CacheRegistry(
            settings, shared_memory=SharedMemoryBackend(fake_redis, instance_id="x")
        )
        assert "apc" not in registry.get_all_caches()

    def test_mapping_computed_once(self, registry: CacheRegistry, fake_redis: FakeRedis) -> None:
        first = registry.get_all_caches()
        second = registry.get_all_caches()
        assert first is second
        assert fake_redis.ping_count == 1

    def test_backends_built_from_settings(self, settings: Settings) -> None:
        registry = CacheRegistry(settings)
        assert registry.filesystem.root == settings.cache_path
        assert registry.shared_memory.instance_id == settings.instance_id

    def test_get_is_case_insensitive(self, registry: CacheRegistry) -> None:
        assert registry.get("FS") is registry.filesystem
        assert registry.get("apc") is registry.shared_memory

    def test_get_unknown(self, fs_only_registry: CacheRegistry) -> None:
        with pytest.raises(UnknownCacheError) as excinfo:
            fs_only_registry.get("apc")
        assert excinfo.value.supported == ["fs"]
        assert isinstance(excinfo.value, ValueError)

    def test_build_registry_uses_settings(self, settings: Settings) -> None:
        with patch("cachekit.core.config.get_settings", return_value=settings):
            registry = build_registry()
        assert registry.settings is settings
