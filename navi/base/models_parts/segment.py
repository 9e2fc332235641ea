"""
Conversation segment DTO.

A ``Segment`` is one turn (or the partial turn still streaming) of the
conversation. Instances are frozen: growing a streaming segment produces a
new value, and only the ``SegmentStore`` decides which value is current.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Source(str, Enum):
    """Author of a segment."""

    USER = "user"
    MODEL = "model"
    DIRECTIVE = "directive"


class SegmentStatus(str, Enum):
    """``STREAMING -> COMPLETE`` is the only transition; ``COMPLETE`` is terminal."""

    STREAMING = "streaming"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Segment:
    """One unit of conversation content.

    Attributes:
        source: Who produced the segment.
        answer_text: Finalized-channel text accumulated so far.
        reasoning_text: Reasoning-channel text, ``None`` until the first
            reasoning delta arrives.
        status: ``STREAMING`` while deltas may still be appended.
    """

    source: Source
    answer_text: str = ""
    reasoning_text: Optional[str] = None
    status: SegmentStatus = SegmentStatus.COMPLETE

    @property
    def streaming(self) -> bool:
        return self.status is SegmentStatus.STREAMING

    def extended(self, *, answer: str = "", reasoning: str = "") -> "Segment":
        """Return a copy with ``answer``/``reasoning`` concatenated."""
        reasoning_text = self.reasoning_text
        if reasoning:
            reasoning_text = (reasoning_text or "") + reasoning
        return replace(self, answer_text=self.answer_text + answer, reasoning_text=reasoning_text)

    def completed(self) -> "Segment":
        if self.status is SegmentStatus.COMPLETE:
            return self
        return replace(self, status=SegmentStatus.COMPLETE)

    @classmethod
    def user(cls, text: str) -> "Segment":
        return cls(source=Source.USER, answer_text=text)

    @classmethod
    def directive(cls, text: str) -> "Segment":
        return cls(source=Source.DIRECTIVE, answer_text=text)

    @classmethod
    def pending_model(cls) -> "Segment":
        return cls(source=Source.MODEL, status=SegmentStatus.STREAMING)


__all__ = ["Segment", "SegmentStatus", "Source"]
