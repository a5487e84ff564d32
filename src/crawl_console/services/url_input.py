"""
URL Input Service

Draft URL with live validation. Changes are validated through a debouncer
so that only the last value typed within the delay is checked.
"""

from crawl_console.domain.urls import check_url
from crawl_console.models.url_input import UrlCheck, UrlInputState
from crawl_console.utils.debounce import Debouncer


class UrlInput:
    def __init__(self, debounce_seconds: float = 0.3):
        self.value = ""
        self.check = UrlCheck()
        self._debouncer = Debouncer(debounce_seconds, self._validate)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def state(self) -> UrlInputState:
        return UrlInputState(value=self.value, check=self.check, pending=self.pending)

    def change(self, value: str) -> None:
        """Store a new draft and schedule its validation. Needs a running event loop."""
        self.value = value
        self._debouncer.call(value)

    def validate_now(self) -> UrlCheck:
        self._debouncer.cancel()
        self._validate(self.value)
        return self.check

    def select(self, url: str) -> UrlCheck:
        """Use a history entry as the draft, validated immediately."""
        self.value = url
        return self.validate_now()

    def clear(self) -> None:
        self._debouncer.cancel()
        self.value = ""
        self.check = UrlCheck()

    def close(self) -> None:
        self._debouncer.cancel()

    def _validate(self, value: str) -> None:
        self.check = check_url(value)
