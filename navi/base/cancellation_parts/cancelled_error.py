"""Cancellation error type.

Defines the public ``CancelledError`` raised when a streaming session observes
that it has been cancelled or superseded.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a session operation observes a cancellation request.

    Distinguishes cooperative cancellation from transport failures so the
    network task can stop producing events without reporting a
    ``StreamFailed`` for a session nobody is listening to anymore.
    """

__all__ = ["CancelledError"]
