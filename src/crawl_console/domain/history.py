"""
URL History Reducers

Recently submitted URLs, most recent first, without duplicates.
"""

from typing import Any

DEFAULT_HISTORY_LIMIT = 10


def remember_url(
    history: list[str], url: str, limit: int = DEFAULT_HISTORY_LIMIT
) -> list[str]:
    """Prepend `url` unless it is already present, keeping at most `limit` entries."""
    if url in history:
        return list(history[:limit])
    return [url, *history][:limit]


def coerce_history(value: Any, limit: int = DEFAULT_HISTORY_LIMIT) -> list[str]:
    """
    Sanitize a decoded history value.

    Non-string entries and duplicates are dropped (first occurrence wins).
    Raises ValueError if the value is not a list.
    """
    if not isinstance(value, list):
        raise ValueError(f"History must be a list, got {type(value).__name__}")
    result: list[str] = []
    for item in value:
        if isinstance(item, str) and item and item not in result:
            result.append(item)
    return result[:limit]
