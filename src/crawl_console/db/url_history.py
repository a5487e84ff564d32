"""
URL History Storage

Persists the recent-URL list as a JSON array under a fixed key.
"""

import json
import logging

from crawl_console.db.kv_store import KeyValueStore
from crawl_console.domain.history import DEFAULT_HISTORY_LIMIT, coerce_history

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "crawl-url-history"


class UrlHistoryStore:
    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_HISTORY_KEY,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.store = store
        self.key = key
        self.limit = limit

    def load(self) -> list[str]:
        """
        Load saved history.

        Returns:
            Saved URLs, or an empty list if nothing is saved or the value is corrupt
        """
        raw = self.store.get(self.key)
        if raw is None:
            return []
        try:
            return coerce_history(json.loads(raw), self.limit)
        except ValueError as e:
            logger.warning(f"Discarding unreadable URL history under '{self.key}': {e}")
            return []

    def save(self, history: list[str]) -> None:
        self.store.set(self.key, json.dumps(history[: self.limit]))

    def clear(self) -> None:
        self.store.delete(self.key)
