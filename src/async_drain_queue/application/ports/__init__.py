"""Protocols the application layer expects adapters to satisfy."""

from __future__ import annotations

from .scheduler import SchedulerPort, TimerHandle

__all__ = ["SchedulerPort", "TimerHandle"]
