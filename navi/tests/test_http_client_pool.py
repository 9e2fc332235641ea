"""Pooled httpx clients keyed by (base_url, purpose)."""
from __future__ import annotations

from navi.base.http import build_timeout, close_all_clients, get_httpx_client


def test_clients_are_reused_per_key_and_recreated_after_close(monkeypatch):
    monkeypatch.setenv("NAVI_TIMEOUT_STREAM_SECONDS", "7")
    monkeypatch.setenv("NAVI_TIMEOUT_CONNECT_SECONDS", "3")
    close_all_clients()
    try:
        a = get_httpx_client("http://localhost:1234/v1", "lmstudio.stream")
        b = get_httpx_client("http://localhost:1234/v1", "lmstudio.stream")
        c = get_httpx_client("http://localhost:1234/v1", "other")
        assert a is b
        assert a is not c
        assert a.timeout.read == 7.0 and a.timeout.connect == 3.0

        close_all_clients()
        assert a.is_closed
        assert get_httpx_client("http://localhost:1234/v1", "lmstudio.stream") is not a
    finally:
        close_all_clients()


def test_build_timeout_uses_defaults():
    timeout = build_timeout()
    assert timeout.connect == 10.0
    assert timeout.read == 60.0
