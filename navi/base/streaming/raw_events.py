"""Raw provider events.

Provider adapters parse their wire format into these three shapes. Anything
else coming out of ``open_stream`` is an unrecognized payload, which the
decoder reports as a protocol failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..models import UsageStats


@dataclass(frozen=True)
class AnswerFragment:
    """A piece of the final answer channel."""

    text: str


@dataclass(frozen=True)
class ReasoningFragment:
    """A piece of the reasoning channel."""

    text: str


@dataclass(frozen=True)
class End:
    """Explicit end-of-stream marker, optionally carrying token usage."""

    usage: Optional[UsageStats] = None


RawProviderEvent = Union[AnswerFragment, ReasoningFragment, End]

__all__ = ["AnswerFragment", "ReasoningFragment", "End", "RawProviderEvent"]
