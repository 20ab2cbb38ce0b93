# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache list / clear reports.

The ``collect_*`` functions gather structured summaries from a
:class:`~cachekit.cache.registry.CacheRegistry`; the ``*_report`` functions
render them as the plain-text reports printed by the CLI.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from cachekit.cache.registry import CacheRegistry

logger = logging.getLogger("cachekit.reports")


class BackendSummary(BaseModel):
    identifier: str
    entries: int
    backend: str


class EntrySummary(BaseModel):
    category: str | None
    name: str
    size: int
    hits: int | None = None

    @property
    def unknown(self) -> bool:
        """Entry not created by cachekit (no category)."""
        return self.category is None


class ClearSummary(BaseModel):
    cleared: list[str]
    count: int
    dry_run: bool = False


def collect_backend_summaries(registry: CacheRegistry) -> list[BackendSummary]:
    return [
        BackendSummary(
            identifier=identifier,
            entries=len(backend.list_all()),
            backend=type(backend).__name__,
        )
        for identifier, backend in registry.get_all_caches().items()
    ]


def collect_entries(
    registry: CacheRegistry,
    cache: str,
    show_unknown: bool = False,
) -> list[EntrySummary]:
    """Summarise the entries of backend *cache*.

    Raises:
        UnknownCacheError: *cache* is not a supported backend.
    """
    backend = registry.get(cache)
    entries: list[EntrySummary] = []
    for entry in backend.list_all().values():
        if entry.category is None and not show_unknown:
            continue
        info = entry.get_information()
        entries.append(
            EntrySummary(category=entry.category, name=entry.name, size=info.size, hits=info.hits)
        )
    return entries


def cache_list_report(
    registry: CacheRegistry,
    cache: str | None = None,
    show_unknown: bool = False,
) -> str:
    """Render the backend overview, or the entries of one backend."""
    if not cache:
        output = "\nAll caches supported by the current environment:"
        for summary in collect_backend_summaries(registry):
            output += (
                f'\n * {summary.identifier} with {summary.entries} items'
                f' using class "{summary.backend}"'
            )
        output += '\nTo detail one cache items, use the option "--cache".\n'
        return output

    identifier = cache.lower()
    output = f'\nFor cache "{identifier}", here is all stored items:'
    for entry in collect_entries(registry, identifier, show_unknown=show_unknown):
        prefix = "[*] " if entry.unknown else ""
        output += (
            f'\n * {prefix}Cache "{entry.category or ""}" with name "{entry.name}"'
            f" has a size of {entry.size}."
        )
    if show_unknown:
        output += "\nUnknown cache items are prepended with [*].\n"
    else:
        output += (
            "\nTo show all cache items, even from other applications,"
            ' use the option "--show-unknown".\n'
        )
    return output


def clear_all_caches(registry: CacheRegistry, dry_run: bool = False) -> ClearSummary:
    """Wipe every supported backend and report which ones succeeded."""
    cleared: list[str] = []
    caches = registry.get_all_caches()
    for identifier, backend in caches.items():
        if dry_run:
            cleared.append(identifier)
            continue
        if backend.clear_all():
            cleared.append(identifier)
        else:
            logger.warning("Unable to clear cache %s", identifier)
    return ClearSummary(cleared=cleared, count=len(caches), dry_run=dry_run)


def cache_clear_report(
    registry: CacheRegistry,
    verbose: bool = False,
    dry_run: bool = False,
) -> str:
    summary = clear_all_caches(registry, dry_run=dry_run)
    lines: list[str] = []
    if verbose:
        verb = "Would clear" if dry_run else "Cleared"
        lines.extend(f'{verb} all cache of "{identifier.upper()}".' for identifier in summary.cleared)
    if dry_run:
        lines.append(f"All caches ({summary.count}) would be erased (dry run).")
    else:
        lines.append(f"All caches ({summary.count}) were erased.")
    return "\n".join(lines)
