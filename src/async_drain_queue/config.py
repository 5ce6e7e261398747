"""Environment-driven configuration for the drain queue.

Purpose
-------
Resolve queue defaults from environment variables, optionally hydrated from a
nearby ``.env`` file via ``python-dotenv``.

Contents
--------
* :class:`QueueSettings` - immutable settings consumed by
  :meth:`AsyncDrainQueue.from_settings`.
* :func:`load_settings` - read settings from a mapping (``os.environ`` by default).
* :func:`enable_dotenv` / :func:`should_use_dotenv` - opt-in ``.env`` loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from async_drain_queue.domain.interval import DEFAULT_INTERVAL_MS, validate_interval

INTERVAL_ENV_VAR = "ASYNC_DRAIN_QUEUE_INTERVAL_MS"
DOTENV_ENV_VAR = "ASYNC_DRAIN_QUEUE_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

_DOTENV_LOADED: Path | None = None


@dataclass(frozen=True, slots=True)
class QueueSettings:
    """Defaults applied when constructing a queue from configuration."""

    interval_ms: float = DEFAULT_INTERVAL_MS

    def __post_init__(self) -> None:
        validate_interval(self.interval_ms)


def load_settings(environ: Mapping[str, str] | None = None) -> QueueSettings:
    """Return :class:`QueueSettings` resolved from ``environ``.

    Raises
    ------
    ValueError
        If ``ASYNC_DRAIN_QUEUE_INTERVAL_MS`` is set but not a positive number.

    Examples
    --------
    >>> load_settings({"ASYNC_DRAIN_QUEUE_INTERVAL_MS": "50"}).interval_ms
    50
    >>> load_settings({}).interval_ms
    250
    """

    source = os.environ if environ is None else environ
    raw = source.get(INTERVAL_ENV_VAR)
    if raw is None or not raw.strip():
        return QueueSettings()
    return QueueSettings(interval_ms=_parse_interval(raw))


def _parse_interval(raw: str) -> float:
    text = raw.strip()
    try:
        value: float = int(text)
    except ValueError:
        try:
            value = float(text)
        except ValueError as exc:
            raise ValueError(f"{INTERVAL_ENV_VAR} must be a number of milliseconds (got {raw!r})") from exc
    try:
        return validate_interval(value)
    except ValueError as exc:
        raise ValueError(f"{INTERVAL_ENV_VAR}: {exc}") from exc


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading applies; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{DOTENV_ENV_VAR} must be a boolean flag (got {env_value!r})")


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` above the working directory.

    Existing environment variables keep precedence. Repeated calls reuse the
    first result.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    located = find_dotenv(usecwd=True)
    if not located:
        return None
    path = Path(located).resolve()
    load_dotenv(path, override=False)
    _DOTENV_LOADED = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    """Forget which ``.env`` file was loaded."""

    global _DOTENV_LOADED
    _DOTENV_LOADED = None


__all__ = [
    "DOTENV_ENV_VAR",
    "INTERVAL_ENV_VAR",
    "QueueSettings",
    "enable_dotenv",
    "load_settings",
    "should_use_dotenv",
]
