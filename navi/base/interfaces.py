"""
Provider-agnostic interfaces for the session engine.

Re-exports Protocols split into single-class modules under
``navi.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import HasDefaultModel, ProviderAdapter

__all__ = ["HasDefaultModel", "ProviderAdapter"]
