"""Unified stream error taxonomy public surface.

Re-exports the implementations under ``navi.base.errors_parts`` to keep a
stable import path.
"""

from .errors_parts.error_kind import StreamErrorKind, describe_failure
from .errors_parts.stream_error import ProtocolError, StreamError
from .errors_parts.classification import classify_exception

__all__ = ["StreamErrorKind", "describe_failure", "StreamError", "ProtocolError", "classify_exception"]
