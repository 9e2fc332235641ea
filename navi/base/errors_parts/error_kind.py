"""
Normalized stream failure kinds (taxonomy).

Defines the ``StreamErrorKind`` enumeration carried by ``StreamFailed``
events. Values are lowercase snake_case and are a stable contract for logging.
"""
from __future__ import annotations

from enum import Enum


class StreamErrorKind(str, Enum):
    """Failure categories a streaming session can end with."""

    NETWORK = "network"
    PROTOCOL = "protocol"
    PROVIDER_REJECTED = "provider_rejected"
    TIMEOUT = "timeout"


_DESCRIPTIONS = {
    StreamErrorKind.NETWORK: "Connection to the provider failed.",
    StreamErrorKind.PROTOCOL: "Received a malformed response from the provider.",
    StreamErrorKind.PROVIDER_REJECTED: "The provider rejected the request.",
    StreamErrorKind.TIMEOUT: "The provider took too long to respond.",
}


def describe_failure(kind: StreamErrorKind) -> str:
    """Return the short user-facing status line for a failure kind."""
    return _DESCRIPTIONS[StreamErrorKind(kind)]


__all__ = ["StreamErrorKind", "describe_failure"]
