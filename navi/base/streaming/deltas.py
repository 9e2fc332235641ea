"""Session-tagged delta events.

These are the only values the network task hands to the owner loop. Each
carries the id of the session that produced it so output of a cancelled or
superseded session can be recognized and discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..errors import StreamErrorKind
from ..models import UsageStats


@dataclass(frozen=True)
class AnswerChunk:
    session_id: int
    text: str


@dataclass(frozen=True)
class ReasoningChunk:
    session_id: int
    text: str


@dataclass(frozen=True)
class StreamEnded:
    session_id: int
    usage: Optional[UsageStats] = None


@dataclass(frozen=True)
class StreamFailed:
    session_id: int
    kind: StreamErrorKind
    message: str = ""


DeltaEvent = Union[AnswerChunk, ReasoningChunk, StreamEnded, StreamFailed]
TERMINAL_EVENTS = (StreamEnded, StreamFailed)


def is_terminal(event: object) -> bool:
    """Return True for ``StreamEnded`` / ``StreamFailed``."""
    return isinstance(event, TERMINAL_EVENTS)


__all__ = [
    "AnswerChunk",
    "ReasoningChunk",
    "StreamEnded",
    "StreamFailed",
    "DeltaEvent",
    "TERMINAL_EVENTS",
    "is_terminal",
]
