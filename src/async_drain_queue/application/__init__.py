"""Application layer: notification fan-out, periodic timing and ports."""

from __future__ import annotations

from .notifier import Notifier
from .periodic import PeriodicTimer

__all__ = ["Notifier", "PeriodicTimer"]
