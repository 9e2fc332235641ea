"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Responses API endpoint, relative to the provider base URL
RESPONSES_PATH = "/responses"

# SSE terminator some gateways append after the final event
SSE_DONE_MARKER = "[DONE]"

__all__ = ["MISSING_API_KEY_ERROR", "RESPONSES_PATH", "SSE_DONE_MARKER"]
