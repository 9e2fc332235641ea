"""Errors parts package public surface.

Prefer importing from ``navi.base.errors`` for the stable surface.
"""

from .error_kind import StreamErrorKind, describe_failure
from .stream_error import ProtocolError, StreamError
from .classification import classify_exception

__all__ = ["StreamErrorKind", "describe_failure", "StreamError", "ProtocolError", "classify_exception"]
