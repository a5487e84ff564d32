"""
Debounce Primitive

Last-call-wins scheduling on the running event loop: every call replaces
the pending one, and the callback runs once the calls stop for `delay`
seconds.
"""

import asyncio
from typing import Any, Callable


class Debouncer:
    def __init__(self, delay: float, callback: Callable[..., Any]):
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._args: tuple[Any, ...] = ()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, *args: Any) -> None:
        """Schedule the callback with `args`, replacing any pending call."""
        self.cancel()
        self._args = args
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> bool:
        """Run the pending call now. Returns False if nothing was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        self._handle = None
        args, self._args = self._args, ()
        self.callback(*args)
