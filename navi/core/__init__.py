"""Core state machine: segment store, viewport, reducer."""

from .actions import (
    Action,
    CancelRequested,
    CycleEffort,
    NewConversation,
    Quit,
    Resize,
    ScrollBy,
    ScrollTo,
    SessionStarted,
    SubmitRequest,
)
from .effects import CancelSession, Effect, StartSession
from .reducer import update
from .segments import SegmentStore, SegmentStoreError
from .state import AppState
from .viewport import ViewportState, bottom_offset, clamp, measure_segments, recompute

__all__ = [
    "Action",
    "SubmitRequest",
    "CancelRequested",
    "ScrollTo",
    "ScrollBy",
    "Resize",
    "NewConversation",
    "CycleEffort",
    "Quit",
    "SessionStarted",
    "Effect",
    "StartSession",
    "CancelSession",
    "update",
    "SegmentStore",
    "SegmentStoreError",
    "AppState",
    "ViewportState",
    "recompute",
    "bottom_offset",
    "clamp",
    "measure_segments",
]
