from __future__ import annotations

import math

import pytest

from async_drain_queue.domain.interval import DEFAULT_INTERVAL_MS, to_seconds, validate_interval
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_default_interval_is_quarter_second() -> None:
    assert DEFAULT_INTERVAL_MS == 250
    assert to_seconds(DEFAULT_INTERVAL_MS) == 0.25


@pytest.mark.parametrize("value", [1, 50, 0.5, 250.0])
def test_positive_numbers_pass_through(value: float) -> None:
    assert validate_interval(value) == value


@pytest.mark.parametrize(
    "value, error_match",
    [
        (0, "must be positive"),
        (-20, "must be positive"),
        (math.nan, "must be finite"),
        (math.inf, "must be finite"),
        (True, "number of milliseconds"),
        ("50", "number of milliseconds"),
        (None, "number of milliseconds"),
    ],
)
def test_invalid_intervals_are_rejected(value: object, error_match: str) -> None:
    with pytest.raises(ValueError, match=error_match):
        validate_interval(value)
