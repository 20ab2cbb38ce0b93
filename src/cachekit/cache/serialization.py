# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Payload codec shared by the cache backends.

Values are pickled so that composite values and class instances come back
with their type intact.
"""

from __future__ import annotations

import pickle
from typing import Any

from cachekit.core.exceptions import CacheError


class PayloadError(CacheError):
    """Stored bytes could not be turned back into a value."""


def serialize(value: Any) -> bytes:
    return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)


def deserialize(data: bytes) -> Any:
    """Decode *data* produced by :func:`serialize`.

    Raises:
        PayloadError: The payload is truncated, foreign or references a
            type that can no longer be imported.
    """
    try:
        return pickle.loads(data)
    except Exception as exc:
        raise PayloadError(f"Unreadable cache payload: {exc}") from exc
