"""Public package surface for the timer-drained FIFO queue.

``AsyncDrainQueue`` is the component hosts use; schedulers, the event enum and
configuration helpers are re-exported for wiring and tests.
"""

from __future__ import annotations

from .adapters import AsyncioScheduler, VirtualClockScheduler
from .config import QueueSettings, load_settings
from .domain import DEFAULT_INTERVAL_MS, QueueEvent, RunState
from .queue import AsyncDrainQueue

__all__ = [
    "AsyncDrainQueue",
    "AsyncioScheduler",
    "DEFAULT_INTERVAL_MS",
    "QueueEvent",
    "QueueSettings",
    "RunState",
    "VirtualClockScheduler",
    "load_settings",
]
