"""
Utilities package initialization
"""

from crawl_console.utils.debounce import Debouncer

__all__ = ["Debouncer"]
