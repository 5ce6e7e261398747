"""Scheduler adapter backed by the asyncio event loop.

Purpose
-------
Provide the default :class:`SchedulerPort` so the queue drains on the host's
event loop without owning a thread of its own.

Contents
--------
* :class:`AsyncioScheduler` - ``loop.call_later`` and ``loop.time`` wrapper.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from async_drain_queue.application.ports.scheduler import SchedulerPort


class AsyncioScheduler(SchedulerPort):
    """Schedule callbacks on an asyncio event loop.

    When no loop is passed the scheduler follows the loop running in the
    calling thread, so it can be created outside a coroutine, and a queue
    paused on one loop resumes on whichever loop restarts it.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._explicit_loop = loop
        self._last_loop: asyncio.AbstractEventLoop | None = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Return the loop timers are scheduled on.

        A loop passed to the constructor is always used. Otherwise the running
        loop wins; outside a coroutine the last loop seen is reused while it
        is still open.

        Raises
        ------
        RuntimeError
            If no loop was supplied, none is running in this thread and the
            last loop seen is closed or there was none.
        """

        if self._explicit_loop is not None:
            return self._explicit_loop
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = self._last_loop
            if loop is None or loop.is_closed():
                raise
        self._last_loop = loop
        return loop

    def now(self) -> float:
        """Return the loop's monotonic clock in seconds."""

        return self.loop.time()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Run ``callback`` on the loop after ``delay`` seconds."""

        return self.loop.call_later(delay, callback)


__all__ = ["AsyncioScheduler"]
