"""Timer abstraction for reminder delivery.

The scheduler only needs ``after(delay, callback) -> handle`` and
``cancel(handle)``; the asyncio implementation is the default backend.
"""

import asyncio
from typing import Any, Callable, Protocol

from rulebot.errors import TimerUnavailableError


class Timer(Protocol):
    """One-shot deferred callbacks."""

    def after(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run ``callback`` once after ``delay`` seconds; return a cancel handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Disarm a handle returned by ``after``. Must be safe on fired handles."""
        ...


class AsyncioTimer:
    """Timer backed by ``loop.call_later`` on the running (or given) event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def after(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(max(0.0, delay), callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise TimerUnavailableError("Reminder timers need a running asyncio event loop") from e
