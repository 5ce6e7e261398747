"""Domain values shared by the drain queue layers."""

from __future__ import annotations

from .events import QueueEvent
from .interval import DEFAULT_INTERVAL_MS, to_seconds, validate_interval
from .state import RunState

__all__ = [
    "DEFAULT_INTERVAL_MS",
    "QueueEvent",
    "RunState",
    "to_seconds",
    "validate_interval",
]
