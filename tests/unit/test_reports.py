# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the cache list / clear reports."""

from __future__ import annotations

import pickle

import pytest
from fakes import FakeRedis
from redis.exceptions import ConnectionError as RedisConnectionError

from cachekit.cache.registry import CacheRegistry
from cachekit.core.exceptions import UnknownCacheError
from cachekit.reports import (
    cache_clear_report,
    cache_list_report,
    clear_all_caches,
    collect_backend_summaries,
    collect_entries,
)


@pytest.fixture
def populated(registry: CacheRegistry, fake_redis: FakeRedis) -> CacheRegistry:
    registry.filesystem.entry("report", "q1").set({"total": 42})
    registry.filesystem.entry("report", "q2").set({"total": 7})
    registry.shared_memory.entry("session", "abc").set("token")
    fake_redis.set("foreign_key", pickle.dumps("raw"))
    return registry


# ---------------------------------------------------------------------------
# Structured summaries
# ---------------------------------------------------------------------------


class TestCollect:
    def test_backend_summaries(self, populated: CacheRegistry) -> None:
        summaries = {s.identifier: s for s in collect_backend_summaries(populated)}
        assert summaries["fs"].entries == 2
        assert summaries["fs"].backend == "FileSystemBackend"
        assert summaries["apc"].entries == 2

    def test_entries_skip_unknown(self, populated: CacheRegistry) -> None:
        entries = collect_entries(populated, "apc")
        assert [(e.category, e.name) for e in entries] == [("session", "abc")]

    def test_entries_with_unknown(self, populated: CacheRegistry) -> None:
        entries = collect_entries(populated, "apc", show_unknown=True)
        unknown = [e for e in entries if e.unknown]
        assert [e.name for e in unknown] == ["foreign_key"]

    def test_entry_sizes(self, populated: CacheRegistry) -> None:
        entries = collect_entries(populated, "fs")
        assert all(e.size > 0 for e in entries)
        assert all(e.hits is None for e in entries)

    def test_unknown_cache(self, populated: CacheRegistry) -> None:
        with pytest.raises(UnknownCacheError):
            collect_entries(populated, "memcached")


# ---------------------------------------------------------------------------
# Text reports
# ---------------------------------------------------------------------------


class TestListReport:
    def test_overview(self, populated: CacheRegistry) -> None:
        report = cache_list_report(populated)
        assert "All caches supported by the current environment:" in report
        assert ' * fs with 2 items using class "FileSystemBackend"' in report
        assert ' * apc with 2 items using class "SharedMemoryBackend"' in report
        assert '--cache' in report

    def test_overview_empty_environment(self, fs_only_registry: CacheRegistry) -> None:
        report = cache_list_report(fs_only_registry)
        assert " * fs with 0 items" in report
        assert "apc" not in report

    def test_detail(self, populated: CacheRegistry) -> None:
        report = cache_list_report(populated, "FS")
        assert 'For cache "fs", here is all stored items:' in report
        assert 'Cache "report" with name "q1" has a size of' in report
        assert 'Cache "report" with name "q2" has a size of' in report
        assert "--show-unknown" in report

    def test_detail_hides_unknown(self, populated: CacheRegistry) -> None:
        report = cache_list_report(populated, "apc")
        assert "foreign_key" not in report
        assert 'Cache "session" with name "abc"' in report

    def test_detail_shows_unknown(self, populated: CacheRegistry) -> None:
        report = cache_list_report(populated, "apc", show_unknown=True)
        assert '[*] Cache "" with name "foreign_key"' in report
        assert "Unknown cache items are prepended with [*]." in report

    def test_detail_unknown_cache(self, fs_only_registry: CacheRegistry) -> None:
        with pytest.raises(UnknownCacheError):
            cache_list_report(fs_only_registry, "apc")


class TestClearReport:
    def test_clear_all(self, populated: CacheRegistry, fake_redis: FakeRedis) -> None:
        report = cache_clear_report(populated)
        assert report == "All caches (2) were erased."
        assert populated.filesystem.list_all() == {}
        assert fake_redis.data == {}

    def test_verbose(self, populated: CacheRegistry) -> None:
        report = cache_clear_report(populated, verbose=True)
        assert 'Cleared all cache of "FS".' in report
        assert 'Cleared all cache of "APC".' in report

    def test_dry_run_changes_nothing(self, populated: CacheRegistry, fake_redis: FakeRedis) -> None:
        report = cache_clear_report(populated, verbose=True, dry_run=True)
        assert 'Would clear all cache of "FS".' in report
        assert "would be erased" in report
        assert len(populated.filesystem.list_all()) == 2
        assert len(fake_redis.data) == 2

    def test_failed_clear_not_reported_as_cleared(
        self, populated: CacheRegistry, fake_redis: FakeRedis, monkeypatch
    ) -> None:
        populated.get_all_caches()

        def broken():
            raise RedisConnectionError("gone")

        monkeypatch.setattr(fake_redis, "flushdb", broken)
        summary = clear_all_caches(populated)
        assert summary.cleared == ["fs"]
        assert summary.count == 2
