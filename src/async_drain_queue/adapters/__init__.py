"""Concrete scheduler adapters."""

from __future__ import annotations

from .asyncio_scheduler import AsyncioScheduler
from .virtual_scheduler import VirtualClockScheduler, VirtualTimerHandle

__all__ = ["AsyncioScheduler", "VirtualClockScheduler", "VirtualTimerHandle"]
