"""Helpers specific to the OpenRouter gateway.

Pure functions; the adapter in ``client.py`` wires them in.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.models import Effort

# Application name OpenRouter shows in its activity log
APP_TITLE = "navi"


def openrouter_reasoning(effort: Effort) -> Optional[Dict[str, Any]]:
    """Map effort to OpenRouter's ``reasoning`` field.

    ``AUTO`` and ``NONE`` omit the field: the gateway then applies the
    model's own default, and models without reasoning reject explicit effort.
    """
    if effort in (Effort.AUTO, Effort.NONE):
        return None
    return {"effort": effort.value}


def attribution_headers() -> Dict[str, str]:
    return {"X-Title": APP_TITLE}


__all__ = ["openrouter_reasoning", "attribution_headers", "APP_TITLE"]
