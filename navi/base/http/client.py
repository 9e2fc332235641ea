"""Shared HTTP client pool for provider adapters.

Purpose:
    Keep one reusable ``httpx.Client`` per (base_url, purpose) so consecutive
    streaming sessions reuse connections. Timeouts derive from
    :func:`get_timeout_config`: the connect timeout bounds connection setup and
    the stream timeout bounds the idle time between two reads, which is what
    turns a stalled provider into a ``TIMEOUT`` failure.

Lifecycle & cleanup:
    Clients are closed at interpreter exit via ``atexit``; tests and the
    shell may call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def build_timeout() -> httpx.Timeout:
    """Return the ``httpx.Timeout`` derived from the current timeout config."""
    cfg = get_timeout_config()
    return httpx.Timeout(cfg.stream_timeout_seconds, connect=cfg.connect_timeout_seconds)


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: API base URL set on the client so relative paths work.
            ``None`` groups clients under a shared key.
        purpose: Short discriminator for separate pools (e.g. ``"stream"``).

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = build_timeout()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - best-effort shutdown
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["build_timeout", "get_httpx_client", "close_all_clients"]
