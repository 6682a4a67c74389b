"""Debounce primitive for asyncio."""
import asyncio
from typing import Any, Awaitable, Callable, Optional


class Debouncer:
    """
    Run a callback with the last pushed value once input goes quiet.

    Every ``push`` restarts the timer. When the timer fires the callback
    runs as its own task, so a later ``push`` never cancels a callback
    that is already running.
    """

    def __init__(self, callback: Callable[[Any], Awaitable[None]], delay: float):
        self._callback = callback
        self._delay = delay
        self._timer: Optional[asyncio.Task] = None
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        return self._timer is not None and not self._timer.done()

    def push(self, value: Any) -> None:
        """Supersede any pending value and restart the quiet period."""
        self.cancel()
        self._timer = asyncio.ensure_future(self._fire_later(value))

    def cancel(self) -> None:
        """Drop the pending value, if any. Running callbacks are untouched."""
        if self.pending:
            self._timer.cancel()
        self._timer = None

    async def wait(self) -> None:
        """Wait until no timer is pending and no callback is running."""
        while True:
            tasks = set(self._running)
            if self.pending:
                tasks.add(self._timer)
            if not tasks:
                return
            await asyncio.wait(tasks)

    async def _fire_later(self, value: Any) -> None:
        await asyncio.sleep(self._delay)
        task = asyncio.ensure_future(self._callback(value))
        self._running.add(task)
        task.add_done_callback(self._running.discard)
