# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output for cache reports."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from cachekit.reports import BackendSummary, EntrySummary

console = Console()


def format_backends_table(summaries: list[BackendSummary]) -> None:
    """Print the supported backends with their entry counts."""
    table = Table(title="Supported Caches")
    table.add_column("Cache", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("Backend", style="dim")
    for summary in summaries:
        table.add_row(summary.identifier, str(summary.entries), summary.backend)
    console.print(table)


def format_entries_table(identifier: str, entries: list[EntrySummary]) -> None:
    """Print the entries of one backend; unknown entries are dimmed."""
    if not entries:
        console.print(f"No entries in cache {identifier}.")
        return
    table = Table(title=f"Cache Entries ({identifier})")
    table.add_column("Category", style="bold")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Hits", justify="right")
    for entry in entries:
        table.add_row(
            entry.category or "[*]",
            entry.name,
            str(entry.size),
            str(entry.hits) if entry.hits is not None else "-",
            style="dim" if entry.unknown else None,
        )
    console.print(table)
