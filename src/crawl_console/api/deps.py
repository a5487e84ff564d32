"""
API Dependencies

Dependency injection for FastAPI routes. The console instance lives on
app.state and is created by the application factory.
"""

from fastapi import Request

from crawl_console.services.console import CrawlConsole


def get_console(request: Request) -> CrawlConsole:
    """Get the console bound to the running application"""
    return request.app.state.console
