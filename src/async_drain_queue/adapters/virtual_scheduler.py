"""Manually advanced scheduler for deterministic hosts and tests.

Purpose
-------
Replace wall-clock waiting with an explicit :meth:`VirtualClockScheduler.advance`
so timing behaviour can be asserted exactly.

Contents
--------
* :class:`VirtualClockScheduler` - heap of pending callbacks keyed by due time.
* :class:`VirtualTimerHandle` - cancellable handle for one pending callback.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable

from async_drain_queue.application.ports.scheduler import SchedulerPort, TimerHandle


class VirtualTimerHandle(TimerHandle):
    """Handle for a callback registered with :class:`VirtualClockScheduler`."""

    __slots__ = ("when", "callback", "_cancelled")

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        """Mark the callback as cancelled; it will be discarded when due."""

        self._cancelled = True

    def cancelled(self) -> bool:
        """Return ``True`` once :meth:`cancel` has been called."""

        return self._cancelled


class VirtualClockScheduler(SchedulerPort):
    """Scheduler whose clock only moves when :meth:`advance` is called.

    Examples
    --------
    >>> clock = VirtualClockScheduler()
    >>> fired = []
    >>> _ = clock.call_later(0.25, lambda: fired.append(clock.now()))
    >>> clock.advance(0.1)
    >>> fired
    []
    >>> clock.advance(0.2)
    >>> fired
    [0.25]
    >>> round(clock.now(), 2)
    0.3
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._heap: list[tuple[float, int, VirtualTimerHandle]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        """Return the current virtual time in seconds."""

        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> VirtualTimerHandle:
        """Register ``callback`` to run once the clock reaches ``now + delay``."""

        if delay < 0:
            delay = 0.0
        handle = VirtualTimerHandle(self._now + delay, callback)
        heapq.heappush(self._heap, (handle.when, next(self._sequence), handle))
        return handle

    def advance(self, seconds: float) -> None:
        """Move the clock forward by ``seconds``, firing every due callback.

        Callbacks run in due-time order, first-registered first among equal
        due times. The clock reads each callback's due time while it runs,
        and callbacks scheduled during the advance fire too when they fall
        inside the window.

        Raises
        ------
        ValueError
            If ``seconds`` is negative.
        """

        if seconds < 0:
            raise ValueError("seconds must not be negative")
        target = self._now + seconds
        while self._heap and self._heap[0][0] <= target:
            when, _, handle = heapq.heappop(self._heap)
            if handle.cancelled():
                continue
            self._now = max(self._now, when)
            handle.callback()
        self._now = target

    def advance_to(self, when: float) -> None:
        """Advance the clock to the absolute time ``when``."""

        self.advance(max(0.0, when - self._now))

    def pending(self) -> int:
        """Return the number of callbacks still waiting to fire."""

        return sum(1 for _, _, handle in self._heap if not handle.cancelled())


__all__ = ["VirtualClockScheduler", "VirtualTimerHandle"]
