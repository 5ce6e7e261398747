"""Notification kinds published and accepted by the drain queue.

Purpose
-------
Name the in-process notifications exchanged between the queue and its host so
listeners can be registered by enum member or by the plain string value.

Contents
--------
* :class:`QueueEvent` - enumeration of notification kinds.
"""

from __future__ import annotations

from enum import Enum


class QueueEvent(str, Enum):
    """Notification kinds understood by :class:`AsyncDrainQueue`.

    Examples
    --------
    >>> QueueEvent.from_name("dequeued") is QueueEvent.DEQUEUED
    True
    >>> QueueEvent.INTERVAL.inbound
    True
    """

    ENQUEUED = "enqueued"
    DEQUEUED = "dequeued"
    INTERVAL = "interval"

    @property
    def inbound(self) -> bool:
        """Return ``True`` for notifications a host may emit into the queue."""

        return self is QueueEvent.INTERVAL

    @classmethod
    def from_name(cls, value: QueueEvent | str) -> QueueEvent:
        """Resolve ``value`` into a member, accepting case-insensitive strings.

        Raises
        ------
        ValueError
            If ``value`` does not name a known notification.
        """

        if isinstance(value, QueueEvent):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            known = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown queue event {value!r}; expected one of: {known}") from exc


__all__ = ["QueueEvent"]
