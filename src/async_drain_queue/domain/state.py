"""Run state of the drain queue."""

from __future__ import annotations

from enum import Enum


class RunState(str, Enum):
    """Whether the queue currently drains on its timer.

    Pausing is modelled as :attr:`STOPPED`; the queue is reusable indefinitely
    so there is no terminal state.
    """

    STOPPED = "stopped"
    RUNNING = "running"


__all__ = ["RunState"]
