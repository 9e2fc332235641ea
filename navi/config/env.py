"""navi.config.env
===============

Provider credential environment variables.

``ENV_MAP`` is the single source of truth for which variable holds a
provider's API key. Providers absent from the map (LM Studio, mock) need no
key. Helpers return ``None`` instead of raising; callers decide what a
missing key means.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openrouter": "OPENROUTER_API_KEY",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder rather than a real key.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme`` or
    ``example``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_name(provider: str) -> Optional[str]:
    return ENV_MAP.get(provider.lower()) if provider else None


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_name)`` for the provider's API key.

    Empty and placeholder values resolve to ``None`` so the adapter reports a
    missing key instead of sending a bogus one.
    """
    name = get_env_var_name(provider)
    if name is None:
        return None, None
    val = os.getenv(name)
    if not val or is_placeholder(val):
        return None, name
    return val, name


__all__ = ["ENV_MAP", "is_placeholder", "get_env_var_name", "resolve_provider_key"]
