"""Drain interval defaults and validation.

The interval is expressed in milliseconds at the public API and converted to
seconds before it reaches a scheduler.
"""

from __future__ import annotations

import math
from numbers import Real

DEFAULT_INTERVAL_MS: float = 250


def validate_interval(interval_ms: object) -> float:
    """Return ``interval_ms`` when it is a usable drain period.

    Parameters
    ----------
    interval_ms:
        Candidate period in milliseconds.

    Returns
    -------
    float
        The validated value, unchanged in type for ints and floats.

    Raises
    ------
    ValueError
        If the value is not a real number, is a boolean, is not finite, or is
        not strictly positive. A zero or negative period would spin the timer.

    Examples
    --------
    >>> validate_interval(50)
    50
    >>> validate_interval(0)
    Traceback (most recent call last):
    ...
    ValueError: interval_ms must be positive (got 0)
    """

    if isinstance(interval_ms, bool) or not isinstance(interval_ms, Real):
        raise ValueError(f"interval_ms must be a number of milliseconds (got {interval_ms!r})")
    if not math.isfinite(interval_ms):
        raise ValueError(f"interval_ms must be finite (got {interval_ms!r})")
    if interval_ms <= 0:
        raise ValueError(f"interval_ms must be positive (got {interval_ms!r})")
    return interval_ms  # type: ignore[return-value]


def to_seconds(interval_ms: float) -> float:
    """Convert milliseconds into the seconds used by schedulers."""

    return interval_ms / 1000.0


__all__ = ["DEFAULT_INTERVAL_MS", "to_seconds", "validate_interval"]
