"""HTTP utilities shared by provider adapters."""

from .client import build_timeout, close_all_clients, get_httpx_client

__all__ = ["build_timeout", "get_httpx_client", "close_all_clients"]
