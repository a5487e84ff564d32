"""
Services package initialization
"""

from crawl_console.services.backend_client import BackendClient
from crawl_console.services.config_editor import ConfigEditor
from crawl_console.services.console import CrawlConsole
from crawl_console.services.session import CrawlSession
from crawl_console.services.url_input import UrlInput

__all__ = ["BackendClient", "ConfigEditor", "CrawlConsole", "CrawlSession", "UrlInput"]
