"""Unified timeout utilities for the session engine.

Centralizes the timeout values used by provider adapters and the network
task, and exposes ``iter_with_deadline`` which enforces the per-request
duration ceiling on a provider's raw event stream.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever one of them changes). Supported variables:
        NAVI_TIMEOUT_CONNECT_SECONDS
        NAVI_TIMEOUT_STREAM_SECONDS
        NAVI_TIMEOUT_OVERALL_SECONDS

iter_with_deadline(events, seconds)
    Wraps an iterator so that ``TimeoutError`` is raised once the wall clock
    deadline passes without the stream finishing. The check runs between
    events; a blocked read is bounded by the HTTP idle timeout instead.

Failure Modes
-------------
``TimeoutError`` (classified as ``StreamErrorKind.TIMEOUT`` by the network task).
"""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")

_ENV_CONNECT = "NAVI_TIMEOUT_CONNECT_SECONDS"
_ENV_STREAM = "NAVI_TIMEOUT_STREAM_SECONDS"
_ENV_OVERALL = "NAVI_TIMEOUT_OVERALL_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Establishing the connection to the provider.
        stream_timeout_seconds: Idle time allowed between two reads of the
            streaming response.
        overall_timeout_seconds: Ceiling for a whole request, from start until
            the terminal event. ``None`` disables the ceiling.
    """

    connect_timeout_seconds: float = 10.0
    stream_timeout_seconds: float = 60.0
    overall_timeout_seconds: float | None = 600.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse a positive float from ``name``; return ``default`` when unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached ``TimeoutConfig`` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in (_ENV_CONNECT, _ENV_STREAM, _ENV_OVERALL))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=float(_parse_env_float(_ENV_CONNECT, defaults.connect_timeout_seconds)),
        stream_timeout_seconds=float(_parse_env_float(_ENV_STREAM, defaults.stream_timeout_seconds)),
        overall_timeout_seconds=_parse_env_float(_ENV_OVERALL, defaults.overall_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def iter_with_deadline(
    events: Iterable[T],
    seconds: Optional[float],
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Iterator[T]:
    """Yield from ``events`` until exhausted or the deadline elapses.

    Parameters:
        events: Source iterable (typically a provider's raw event stream).
        seconds: Deadline measured from the first ``next()`` call. ``None`` or a
            non-positive value disables the guard.
        clock: Monotonic clock, injectable for tests.

    Raises:
        TimeoutError: When an event arrives after the deadline.
    """
    if not seconds or seconds <= 0:
        yield from events
        return
    deadline = clock() + seconds
    for item in events:
        if clock() > deadline:
            close = getattr(events, "close", None)
            if callable(close):
                close()
            raise TimeoutError(f"no terminal event within {seconds}s")
        yield item


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "iter_with_deadline",
]
