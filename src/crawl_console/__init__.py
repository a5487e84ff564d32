"""
Crawl Console

Control console for web-crawl sessions and the crawl backend API.
"""

__version__ = "0.1.0"
