"""Port describing the timer infrastructure that drives draining."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Handle returned by :meth:`SchedulerPort.call_later`."""

    def cancel(self) -> None:
        """Prevent the callback from running; calling twice is harmless."""


@runtime_checkable
class SchedulerPort(Protocol):
    """One-shot delayed callbacks plus a monotonic clock, both in seconds."""

    def now(self) -> float:
        """Return the scheduler's current monotonic time."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""


__all__ = ["SchedulerPort", "TimerHandle"]
