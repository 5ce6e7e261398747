"""Timer-drained FIFO queue with enqueue/dequeue notifications.

Purpose
-------
Accept items at arbitrary times and release them one at a time on a periodic
timer, notifying observers on every enqueue and every dequeue.

Contents
--------
* :class:`AsyncDrainQueue` - the queue, its run state and its single timer.

System Role
-----------
Standalone in-memory component. Hosts feed it items, listen for
``enqueued``/``dequeued`` notifications and may push ``interval`` changes.
All work happens on the scheduler's control flow; no locks are taken.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque

from async_drain_queue.adapters.asyncio_scheduler import AsyncioScheduler
from async_drain_queue.application.notifier import DiagnosticHook, Listener, Notifier
from async_drain_queue.application.periodic import PeriodicTimer
from async_drain_queue.application.ports.scheduler import SchedulerPort
from async_drain_queue.config import QueueSettings
from async_drain_queue.domain.events import QueueEvent
from async_drain_queue.domain.interval import DEFAULT_INTERVAL_MS, to_seconds, validate_interval
from async_drain_queue.domain.state import RunState

LOGGER = logging.getLogger(__name__)


class AsyncDrainQueue:
    """FIFO buffer drained by exactly one item per timer tick.

    Examples
    --------
    >>> from async_drain_queue.adapters.virtual_scheduler import VirtualClockScheduler
    >>> clock = VirtualClockScheduler()
    >>> queue = AsyncDrainQueue(scheduler=clock)
    >>> drained = []
    >>> queue.on("dequeued", drained.append)
    >>> queue.enqueue(1)
    >>> queue.enqueue(2)
    >>> queue.start()
    >>> clock.advance(0.26)
    >>> drained, queue.snapshot()
    ([1], (2,))
    >>> queue.pause()
    >>> clock.advance(1.0)
    >>> drained
    [1]
    """

    def __init__(
        self,
        interval_ms: float = DEFAULT_INTERVAL_MS,
        *,
        scheduler: SchedulerPort | None = None,
        diagnostic: DiagnosticHook | None = None,
    ) -> None:
        """Create a stopped, empty queue.

        Parameters
        ----------
        interval_ms:
            Drain period in milliseconds; must be positive.
        scheduler:
            Timer source. Defaults to :class:`AsyncioScheduler`, which arms
            timers on whichever event loop is running when the queue starts.
        diagnostic:
            Optional hook receiving ``(name, payload)`` when a listener raises.
        """
        self._interval_ms = validate_interval(interval_ms)
        self._scheduler: SchedulerPort = scheduler if scheduler is not None else AsyncioScheduler()
        self._buffer: Deque[Any] = deque()
        self._notifier = Notifier(diagnostic=diagnostic)
        self._timer: PeriodicTimer | None = None

    @classmethod
    def from_settings(cls, settings: QueueSettings, **kwargs: Any) -> AsyncDrainQueue:
        """Build a queue from :class:`QueueSettings`; ``kwargs`` go to the constructor."""

        return cls(settings.interval_ms, **kwargs)

    def enqueue(self, item: Any) -> None:
        """Append ``item`` to the tail and notify ``enqueued`` listeners.

        Works in every run state; paused queues keep accepting items.
        """

        self._buffer.append(item)
        self._notifier.emit(QueueEvent.ENQUEUED, item)

    def peek(self, default: Any = None) -> Any:
        """Return the head item without removing it, or ``default`` when empty."""

        if not self._buffer:
            return default
        return self._buffer[0]

    def snapshot(self) -> tuple[Any, ...]:
        """Return an immutable copy of the buffer in dequeue order."""

        return tuple(self._buffer)

    def print(self) -> tuple[Any, ...]:
        """Alias of :meth:`snapshot`."""

        return self.snapshot()

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when no items are buffered."""

        return not self._buffer

    def get_current_interval(self) -> float:
        """Return the stored drain interval in milliseconds."""

        return self._interval_ms

    @property
    def interval_ms(self) -> float:
        """Drain interval in milliseconds."""

        return self._interval_ms

    def set_interval(self, interval_ms: float) -> None:
        """Change the drain interval.

        While running, the live timer is replaced and the next tick fires one
        full new interval from now; nothing is drained at the moment of the
        change. While stopped only the stored value changes. ``interval``
        listeners are notified with the new value.

        Raises
        ------
        ValueError
            If ``interval_ms`` is not a positive finite number, or is too
            small for the scheduler clock to tell ticks apart. The stored
            interval and any live timer are left untouched.
        """

        interval_ms = validate_interval(interval_ms)
        if self.is_running:
            LOGGER.debug("Rearming drain timer at %sms", interval_ms)
            self._arm(interval_ms)
        else:
            LOGGER.debug("Stored drain interval %sms while stopped", interval_ms)
        self._interval_ms = interval_ms
        self._notifier.emit(QueueEvent.INTERVAL, self._interval_ms)

    @property
    def state(self) -> RunState:
        """Return the current :class:`RunState`."""

        return RunState.RUNNING if self.is_running else RunState.STOPPED

    @property
    def is_running(self) -> bool:
        """Return ``True`` while the drain timer is armed."""

        return self._timer is not None and self._timer.active

    def start(self) -> None:
        """Begin draining one item per interval; no-op when already running.

        The first item is drained one full interval after this call.

        Raises
        ------
        ValueError
            If the interval is too small for the scheduler clock to tell
            ticks apart; the queue stays stopped.
        RuntimeError
            If the default scheduler finds no event loop to run on.
        """

        if self.is_running:
            LOGGER.debug("start() ignored; queue already running")
            return
        LOGGER.debug("Starting drain timer at %sms with %d item(s) buffered", self._interval_ms, len(self._buffer))
        self._arm(self._interval_ms)

    def pause(self) -> None:
        """Stop draining immediately; no-op when already stopped.

        Buffered items are kept and enqueue keeps working. No ``dequeued``
        notification is delivered after this returns.
        """

        timer, self._timer = self._timer, None
        if timer is None:
            LOGGER.debug("pause() ignored; queue already stopped")
            return
        timer.cancel()
        LOGGER.debug("Paused drain timer with %d item(s) buffered", len(self._buffer))

    def on(self, event: QueueEvent | str, listener: Listener) -> None:
        """Register ``listener`` for ``event`` notifications."""

        self._notifier.on(event, listener)

    def once(self, event: QueueEvent | str, listener: Listener) -> None:
        """Register ``listener`` for the next ``event`` notification only."""

        self._notifier.once(event, listener)

    def off(self, event: QueueEvent | str, listener: Listener) -> bool:
        """Unregister ``listener``; returns ``True`` if it was registered."""

        return self._notifier.off(event, listener)

    def remove_all_listeners(self, event: QueueEvent | str | None = None) -> None:
        """Unregister every listener, or every listener of ``event``."""

        self._notifier.remove_all_listeners(event)

    def listener_count(self, event: QueueEvent | str) -> int:
        """Return the number of listeners registered for ``event``."""

        return self._notifier.listener_count(event)

    def emit(self, event: QueueEvent | str, payload: Any) -> None:
        """Deliver an inbound notification from the host.

        Only ``interval`` is accepted; it behaves exactly like
        :meth:`set_interval`.

        Raises
        ------
        ValueError
            For outbound kinds, unknown names, or an invalid interval.
        """

        kind = QueueEvent.from_name(event)
        if not kind.inbound:
            raise ValueError(f"{kind.value!r} notifications are published by the queue and cannot be emitted by a host")
        self.set_interval(payload)

    def _arm(self, interval_ms: float) -> None:
        """Replace any live timer with a fresh one ticking every ``interval_ms``.

        The new timer is started before the old one is cancelled, so a
        rejected interval leaves the current timer running.
        """

        timer = PeriodicTimer(self._scheduler, to_seconds(interval_ms), lambda: self._drain_one(timer))
        timer.start()
        previous, self._timer = self._timer, timer
        if previous is not None:
            previous.cancel()

    def _drain_one(self, timer: PeriodicTimer) -> None:
        """Remove and publish the head item on behalf of ``timer``."""

        if timer is not self._timer or not self._buffer:
            return
        item = self._buffer.popleft()
        self._notifier.emit(QueueEvent.DEQUEUED, item)


__all__ = ["AsyncDrainQueue"]
