"""Actions accepted by the reducer.

UI actions come from the input layer; ``SessionStarted`` is posted by the
runtime after it started the session the reducer asked for. Delta events
(``AnswerChunk``, ``ReasoningChunk``, ``StreamEnded``, ``StreamFailed``) are
also reducer inputs and live in ``navi.base.streaming.deltas``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..base.streaming.deltas import DeltaEvent


@dataclass(frozen=True)
class SubmitRequest:
    text: str


@dataclass(frozen=True)
class CancelRequested:
    pass


@dataclass(frozen=True)
class ScrollTo:
    offset: int


@dataclass(frozen=True)
class ScrollBy:
    """Relative scroll (positive moves down), clamped like ``ScrollTo``."""

    rows: int


@dataclass(frozen=True)
class Resize:
    viewport_height: int
    content_width: int


@dataclass(frozen=True)
class NewConversation:
    pass


@dataclass(frozen=True)
class CycleEffort:
    pass


@dataclass(frozen=True)
class SelectModel:
    """Use ``name`` for the next request; a reply in flight keeps its model."""

    name: str


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class SessionStarted:
    session_id: int


UiAction = Union[
    SubmitRequest,
    CancelRequested,
    ScrollTo,
    ScrollBy,
    Resize,
    NewConversation,
    CycleEffort,
    SelectModel,
    Quit,
]
Action = Union[UiAction, SessionStarted, DeltaEvent]

__all__ = [
    "SubmitRequest",
    "CancelRequested",
    "ScrollTo",
    "ScrollBy",
    "Resize",
    "NewConversation",
    "CycleEffort",
    "SelectModel",
    "Quit",
    "SessionStarted",
    "UiAction",
    "Action",
]
