# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from fakes import INSTANCE_ID, FakeRedis

from cachekit.cache.filesystem import FileSystemBackend
from cachekit.cache.registry import CacheRegistry
from cachekit.cache.shared_memory import SharedMemoryBackend
from cachekit.core.config import Settings


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def fs_backend(cache_root: Path) -> FileSystemBackend:
    return FileSystemBackend(cache_root)


@pytest.fixture
def shared_backend(fake_redis: FakeRedis) -> SharedMemoryBackend:
    return SharedMemoryBackend(fake_redis, instance_id=INSTANCE_ID)


@pytest.fixture
def unavailable_backend() -> SharedMemoryBackend:
    return SharedMemoryBackend(url="", instance_id=INSTANCE_ID)


@pytest.fixture
def settings(cache_root: Path) -> Settings:
    return Settings(cache_path=cache_root, redis_url="", instance_id=INSTANCE_ID)


@pytest.fixture
def registry(settings: Settings, shared_backend: SharedMemoryBackend) -> CacheRegistry:
    return CacheRegistry(settings, shared_memory=shared_backend)


@pytest.fixture
def fs_only_registry(settings: Settings) -> CacheRegistry:
    return CacheRegistry(settings)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by the CLI callback between tests."""
    yield
    logging.getLogger("cachekit").handlers.clear()
