"""
Error classification mapping exceptions to ``StreamErrorKind`` values.

Used at the network task boundary: whatever escapes a provider adapter or the
raw event iterator is converted to exactly one failure kind so the owner loop
only ever sees a ``StreamFailed`` event, never an exception.
"""
from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from .error_kind import StreamErrorKind
from .stream_error import StreamError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> StreamErrorKind:
    """Classify an exception into a :class:`StreamErrorKind`.

    Precedence:
        1. ``StreamError`` passthrough.
        2. Timeouts (builtin, asyncio, httpx).
        3. HTTP status present (non-2xx answer) -> ``PROVIDER_REJECTED``.
        4. Decoding failures (``ValueError`` incl. JSON errors) -> ``PROTOCOL``.
        5. Everything else is transport-level -> ``NETWORK``.
    """
    if isinstance(exc, StreamError):
        return exc.kind
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return StreamErrorKind.TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        return StreamErrorKind.PROVIDER_REJECTED
    status = _extract_status(exc)
    if status is not None and not 200 <= status < 300:
        return StreamErrorKind.PROVIDER_REJECTED
    if isinstance(exc, (httpx.DecodingError, UnicodeDecodeError, ValueError)):
        return StreamErrorKind.PROTOCOL
    return StreamErrorKind.NETWORK


__all__ = [
    "classify_exception",
    "_extract_status",
]
