"""
Navi Base Package

Exports provider-agnostic contracts, value types, the streaming engine and
the provider factory:
- Interfaces: the ``ProviderAdapter`` boundary
- Models: segments, reasoning effort, usage statistics
- Streaming: raw events, deltas, decoder and session controller
- Factory: lazy creation of provider adapters by canonical name
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ProtocolError, StreamError, StreamErrorKind, classify_exception, describe_failure
from .factory import ProviderFactory, UnknownProviderError, create_provider
from .interfaces import HasDefaultModel, ProviderAdapter
from .models import Effort, Segment, SegmentStatus, Source, UsageStats
from .streaming import (
    AnswerChunk,
    AnswerFragment,
    End,
    ReasoningChunk,
    ReasoningFragment,
    SessionController,
    StreamDecoder,
    StreamEnded,
    StreamFailed,
    StreamMetrics,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Effort",
    "Segment",
    "SegmentStatus",
    "Source",
    "UsageStats",
    # Interfaces
    "ProviderAdapter",
    "HasDefaultModel",
    # Errors
    "StreamErrorKind",
    "StreamError",
    "ProtocolError",
    "classify_exception",
    "describe_failure",
    # Streaming
    "AnswerFragment",
    "ReasoningFragment",
    "End",
    "AnswerChunk",
    "ReasoningChunk",
    "StreamEnded",
    "StreamFailed",
    "StreamDecoder",
    "SessionController",
    "StreamMetrics",
    # Infrastructure
    "CancellationToken",
    "CancelledError",
    "TimeoutConfig",
    "get_timeout_config",
    "ProviderFactory",
    "UnknownProviderError",
    "create_provider",
]
