"""
Tick scheduling seam for the pacing engine.

The engine schedules exactly one deferred tick at a time and cancels it on
pause, stop, seek and load. Implementations only need to run a callback once
after a delay and support cancelling it.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class ScheduledTick(Protocol):
    """Handle returned by a scheduler for a pending tick."""

    def cancel(self) -> None: ...


class TickScheduler(Protocol):
    """Run a callback once after ``delay_ms`` milliseconds."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTick: ...


class AsyncioTickScheduler:
    """
    Schedule ticks on an asyncio event loop with ``loop.call_later``.

    The loop is resolved lazily so the scheduler can be created before the
    loop starts (for example at FastAPI import time).
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        delay_seconds = max(0.0, delay_ms) / 1000.0
        logger.debug("Scheduling tick in %.1f ms", delay_ms)
        return self.loop.call_later(delay_seconds, callback)
