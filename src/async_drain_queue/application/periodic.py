"""Fixed-rate periodic timer built from one-shot scheduler callbacks.

Purpose
-------
Turn a :class:`SchedulerPort` into a cancellable periodic tick source whose
schedule is anchored at the moment it was armed.

Contents
--------
* :class:`PeriodicTimer` - arm once, tick until :meth:`PeriodicTimer.cancel`.

System Role
-----------
The drain queue owns at most one instance at a time and replaces it whenever
the interval or run state changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from async_drain_queue.application.ports.scheduler import SchedulerPort, TimerHandle

LOGGER = logging.getLogger(__name__)


class PeriodicTimer:
    """Invoke ``callback`` every ``period`` seconds until cancelled.

    Tick ``n`` is due at ``armed_at + n * period``. When the host falls behind
    by more than one period the missed ticks are skipped rather than replayed,
    so a late timer never fires a burst of catch-up callbacks.

    Examples
    --------
    >>> from async_drain_queue.adapters.virtual_scheduler import VirtualClockScheduler
    >>> clock = VirtualClockScheduler()
    >>> ticks = []
    >>> timer = PeriodicTimer(clock, 0.5, lambda: ticks.append(clock.now()))
    >>> timer.start()
    >>> clock.advance(1.2)
    >>> ticks
    [0.5, 1.0]
    >>> timer.cancel()
    >>> clock.advance(1.0)
    >>> ticks
    [0.5, 1.0]
    """

    def __init__(self, scheduler: SchedulerPort, period: float, callback: Callable[[], None]) -> None:
        if period <= 0:
            raise ValueError("period must be positive")
        self._scheduler = scheduler
        self._period = period
        self._callback = callback
        self._handle: TimerHandle | None = None
        self._armed_at: float | None = None
        self._ticks = 0
        self._cancelled = False

    @property
    def period(self) -> float:
        """Return the tick period in seconds."""

        return self._period

    @property
    def active(self) -> bool:
        """Return ``True`` while the timer is armed and not cancelled."""

        return self._armed_at is not None and not self._cancelled

    @property
    def ticks(self) -> int:
        """Return the index of the most recent tick (zero before the first)."""

        return self._ticks

    def start(self) -> None:
        """Arm the timer; the first tick fires one full period from now.

        Raises
        ------
        RuntimeError
            If the timer was cancelled.
        ValueError
            If ``period`` is too small to move the scheduler clock forward from
            its current reading, which would make every tick due immediately.
        """

        if self._cancelled:
            raise RuntimeError("A cancelled PeriodicTimer cannot be restarted")
        if self._armed_at is not None:
            return
        armed_at = self._scheduler.now()
        if armed_at + self._period <= armed_at:
            raise ValueError(f"period {self._period!r}s is below the scheduler clock resolution at {armed_at!r}")
        self._armed_at = armed_at
        self._schedule_next()

    def cancel(self) -> None:
        """Stop ticking immediately. Safe to call repeatedly."""

        if self._cancelled:
            return
        self._cancelled = True
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def _schedule_next(self) -> None:
        armed_at = self._armed_at
        if armed_at is None:
            raise RuntimeError("PeriodicTimer.start() must run before a tick is scheduled")
        now = self._scheduler.now()
        index = self._ticks + 1
        due = armed_at + index * self._period
        if due <= now:
            skipped_to = max(index, int((now - armed_at) // self._period) + 1)
            if armed_at + skipped_to * self._period <= now:
                skipped_to += 1
            due = armed_at + skipped_to * self._period
            if due <= now:
                # The clock has grown past the point where one period is still representable.
                self.cancel()
                LOGGER.error("Periodic timer stopped; period %rs is below the clock resolution at %r", self._period, now)
                raise RuntimeError(f"period {self._period!r}s is below the scheduler clock resolution at {now!r}")
            LOGGER.debug("Periodic timer fell behind; skipping %d tick(s)", skipped_to - index)
            index = skipped_to
            self._ticks = index - 1
        self._handle = self._scheduler.call_later(due - now, self._fire)

    def _fire(self) -> None:
        # The scheduler may already have dispatched this callback when cancel() ran.
        if self._cancelled:
            return
        self._handle = None
        self._ticks += 1
        try:
            self._callback()
        finally:
            if not self._cancelled:
                self._schedule_next()


__all__ = ["PeriodicTimer"]
