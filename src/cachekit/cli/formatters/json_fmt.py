# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""JSON output formatter."""

from __future__ import annotations

import json

from cachekit.reports import BackendSummary, EntrySummary


def format_backends_json(summaries: list[BackendSummary]) -> str:
    """Return the backend overview as a JSON array."""
    return json.dumps([s.model_dump() for s in summaries], indent=2)


def format_entries_json(identifier: str, entries: list[EntrySummary]) -> str:
    """Return the entries of one backend as a JSON document."""
    data = {
        "cache": identifier,
        "count": len(entries),
        "entries": [e.model_dump() for e in entries],
    }
    return json.dumps(data, indent=2)
