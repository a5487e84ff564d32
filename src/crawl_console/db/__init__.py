"""
Console Database Layer

Provides the key-value store and URL history persistence.
"""

from crawl_console.db.kv_store import KeyValueStore
from crawl_console.db.url_history import UrlHistoryStore

__all__ = ["KeyValueStore", "UrlHistoryStore"]
