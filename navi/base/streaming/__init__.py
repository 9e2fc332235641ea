"""Streaming primitives: raw provider events, deltas, decoder and controller."""

from .decoder import StreamDecoder, decode
from .deltas import (
    AnswerChunk,
    DeltaEvent,
    ReasoningChunk,
    StreamEnded,
    StreamFailed,
    TERMINAL_EVENTS,
    is_terminal,
)
from .raw_events import AnswerFragment, End, RawProviderEvent, ReasoningFragment
from .session import Session
from .session_controller import DEFAULT_QUEUE_SIZE, SessionController
from .streaming_metrics import StreamMetrics

__all__ = [
    "AnswerFragment",
    "ReasoningFragment",
    "End",
    "RawProviderEvent",
    "AnswerChunk",
    "ReasoningChunk",
    "StreamEnded",
    "StreamFailed",
    "DeltaEvent",
    "TERMINAL_EVENTS",
    "is_terminal",
    "StreamDecoder",
    "decode",
    "Session",
    "SessionController",
    "DEFAULT_QUEUE_SIZE",
    "StreamMetrics",
]
