"""Synchronous publish/subscribe registry for queue notifications.

Purpose
-------
Deliver each notification to every registered listener, in registration
order, on the caller's control flow.

Contents
--------
* :class:`Notifier` - per-event listener lists with ``on``/``once``/``off``.

System Role
-----------
Backs the observer surface of :class:`async_drain_queue.AsyncDrainQueue`.
Listener failures are isolated the same way the queue worker isolates
adapter failures: log, report through the diagnostic hook, keep going.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from async_drain_queue.domain.events import QueueEvent

LOGGER = logging.getLogger(__name__)

Listener = Callable[[Any], None]
DiagnosticHook = Callable[[str, dict[str, Any]], None]


@dataclass(slots=True, eq=False)
class _Registration:
    listener: Listener
    once: bool = False


class Notifier:
    """Fan notifications out to listeners registered per :class:`QueueEvent`.

    Examples
    --------
    >>> seen = []
    >>> notifier = Notifier()
    >>> notifier.on("enqueued", seen.append)
    >>> notifier.emit(QueueEvent.ENQUEUED, 7)
    >>> seen
    [7]
    """

    def __init__(self, *, diagnostic: DiagnosticHook | None = None) -> None:
        self._listeners: dict[QueueEvent, list[_Registration]] = {event: [] for event in QueueEvent}
        self._diagnostic = diagnostic

    def on(self, event: QueueEvent | str, listener: Listener) -> None:
        """Register ``listener`` for every future ``event`` notification."""

        self._register(event, listener, once=False)

    def once(self, event: QueueEvent | str, listener: Listener) -> None:
        """Register ``listener`` for the next ``event`` notification only."""

        self._register(event, listener, once=True)

    def off(self, event: QueueEvent | str, listener: Listener) -> bool:
        """Remove the earliest registration of ``listener``.

        Returns ``True`` when a registration was removed.
        """

        registrations = self._listeners[QueueEvent.from_name(event)]
        for index, registration in enumerate(registrations):
            # Bound methods are recreated on attribute access, so compare by equality.
            if registration.listener == listener:
                del registrations[index]
                return True
        return False

    def remove_all_listeners(self, event: QueueEvent | str | None = None) -> None:
        """Drop listeners for ``event``, or for every event when ``None``."""

        if event is None:
            for registrations in self._listeners.values():
                registrations.clear()
            return
        self._listeners[QueueEvent.from_name(event)].clear()

    def listener_count(self, event: QueueEvent | str) -> int:
        """Return how many listeners are registered for ``event``."""

        return len(self._listeners[QueueEvent.from_name(event)])

    def emit(self, event: QueueEvent | str, payload: Any) -> None:
        """Invoke every listener of ``event`` with ``payload``.

        Listeners added during emission first see the next notification.
        """

        kind = QueueEvent.from_name(event)
        registrations = self._listeners[kind]
        for registration in tuple(registrations):
            if registration.once:
                try:
                    registrations.remove(registration)
                except ValueError:
                    # Already removed by an earlier listener in this emission.
                    continue
            try:
                registration.listener(payload)
            except Exception as exc:  # noqa: BLE001
                self._report_listener_exception(kind, registration.listener, exc)

    def _register(self, event: QueueEvent | str, listener: Listener, *, once: bool) -> None:
        if not callable(listener):
            raise TypeError(f"listener must be callable (got {listener!r})")
        self._listeners[QueueEvent.from_name(event)].append(_Registration(listener, once=once))

    def _report_listener_exception(self, event: QueueEvent, listener: Listener, exc: Exception) -> None:
        """Log and surface listener failures without interrupting delivery."""

        LOGGER.error("Listener for %r raised an exception; continuing", event.value, exc_info=exc)
        self._emit_diagnostic(
            "listener_error",
            {"event": event.value, "listener": getattr(listener, "__qualname__", repr(listener)), "exception": repr(exc)},
        )

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["DiagnosticHook", "Listener", "Notifier"]
