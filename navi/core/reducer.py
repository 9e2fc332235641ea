"""Reducer: the only place application state changes.

``update(state, event) -> (new_state, effect | None)`` is pure and total:
it performs no I/O, never raises for any action/state combination, and
returns the input state unchanged for events it has nothing to do with.

Session gating: delta events are applied only when their ``session_id``
equals ``state.live_session_id``. The controller already drops stale events
at the queue boundary; this check keeps the reducer correct on its own.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Optional, Tuple, Type

from ..base.errors import describe_failure
from ..base.models import Segment
from ..base.streaming.deltas import AnswerChunk, ReasoningChunk, StreamEnded, StreamFailed
from . import effects
from .actions import (
    CancelRequested,
    CycleEffort,
    NewConversation,
    Quit,
    Resize,
    ScrollBy,
    ScrollTo,
    SelectModel,
    SessionStarted,
    SubmitRequest,
)
from .segments import SegmentStore
from .state import AppState
from .viewport import measure_segment, measure_segments

STATUS_SENDING = "Sending..."
STATUS_RECEIVING = "Receiving..."
STATUS_THINKING = "Thinking..."
STATUS_COMPLETE = "Response complete."
STATUS_CANCELLED = "Cancelled."
STATUS_NEW_CONVERSATION = "New conversation."

Result = Tuple[AppState, Optional[effects.Effect]]


def _with_segments(state: AppState, segments: SegmentStore, **changes: object) -> AppState:
    """Replace the log and re-measure the whole content height."""
    height = measure_segments(segments, state.viewport.content_width)
    return replace(state, segments=segments, viewport=state.viewport.with_content(height), **changes)


def _with_last_replaced(state: AppState, segments: SegmentStore, previous: Segment, **changes: object) -> AppState:
    """Like ``_with_segments`` when only the last segment changed (streaming growth)."""
    width = state.viewport.content_width
    current = segments.last
    height = state.viewport.content_height - measure_segment(previous, width)
    height += measure_segment(current, width) if current is not None else 0
    return replace(state, segments=segments, viewport=state.viewport.with_content(height), **changes)


def _finish(state: AppState, **changes: object) -> AppState:
    """Complete the streaming segment and leave the in-flight state."""
    previous = state.segments.last
    segments = state.segments.complete_last()
    changes.setdefault("is_loading", False)
    changes.setdefault("live_session_id", None)
    if previous is None:
        return replace(state, **changes)
    return _with_last_replaced(state, segments, previous, **changes)


def _is_live(state: AppState, session_id: int) -> bool:
    return state.live_session_id is not None and session_id == state.live_session_id and state.segments.streaming


# Handlers --------------------------------------------------------------------
def _submit(state: AppState, event: SubmitRequest) -> Result:
    if not event.text or not event.text.strip():
        return state, None
    segments = (
        state.segments.complete_last()
        .append(Segment.user(event.text))
        .append(Segment.pending_model())
    )
    new_state = _with_segments(
        state,
        segments,
        live_session_id=None,
        is_loading=True,
        status_message=STATUS_SENDING,
        error=None,
        usage=None,
    )
    new_state = replace(new_state, viewport=new_state.viewport.scroll_to_bottom())
    return new_state, effects.StartSession(segments.without_pending(), state.effort, state.model_name or None)


def _session_started(state: AppState, event: SessionStarted) -> Result:
    if not state.is_loading or state.live_session_id is not None or not state.segments.streaming:
        return state, None
    return replace(state, live_session_id=event.session_id), None


def _answer(state: AppState, event: AnswerChunk) -> Result:
    if not _is_live(state, event.session_id):
        return state, None
    previous = state.segments.last
    segments = state.segments.append_text(answer=event.text)
    return _with_last_replaced(state, segments, previous, status_message=STATUS_RECEIVING), None


def _reasoning(state: AppState, event: ReasoningChunk) -> Result:
    if not _is_live(state, event.session_id):
        return state, None
    previous = state.segments.last
    segments = state.segments.append_text(reasoning=event.text)
    return _with_last_replaced(state, segments, previous, status_message=STATUS_THINKING), None


def _ended(state: AppState, event: StreamEnded) -> Result:
    if not _is_live(state, event.session_id):
        return state, None
    status = event.usage.display_summary() if event.usage is not None else STATUS_COMPLETE
    return _finish(state, usage=event.usage, status_message=status), None


def _failed(state: AppState, event: StreamFailed) -> Result:
    if not _is_live(state, event.session_id):
        return state, None
    summary = describe_failure(event.kind)
    return _finish(state, status_message=summary, error=event.message or summary), None


def _cancel(state: AppState, event: CancelRequested) -> Result:
    if not state.in_flight:
        return state, None
    effect = effects.CancelSession(state.live_session_id) if state.live_session_id is not None else None
    return _finish(state, status_message=STATUS_CANCELLED), effect


def _scroll_to(state: AppState, event: ScrollTo) -> Result:
    return replace(state, viewport=state.viewport.scroll_to(event.offset)), None


def _scroll_by(state: AppState, event: ScrollBy) -> Result:
    return replace(state, viewport=state.viewport.scroll_to(state.viewport.offset + event.rows)), None


def _resize(state: AppState, event: Resize) -> Result:
    width = max(1, event.content_width)
    height = measure_segments(state.segments, width)
    return replace(state, viewport=state.viewport.resized(event.viewport_height, width, height)), None


def _new_conversation(state: AppState, event: NewConversation) -> Result:
    effect = effects.CancelSession(state.live_session_id) if state.live_session_id is not None else None
    fresh = AppState.initial(
        system_prompt=state.system_prompt,
        model_name=state.model_name,
        effort=state.effort,
        viewport_height=state.viewport.viewport_height,
        content_width=state.viewport.content_width,
    )
    return replace(fresh, status_message=STATUS_NEW_CONVERSATION), effect


def _cycle_effort(state: AppState, event: CycleEffort) -> Result:
    effort = state.effort.next()
    return replace(state, effort=effort, status_message=f"Reasoning effort: {effort.label}"), None


def _select_model(state: AppState, event: SelectModel) -> Result:
    name = (event.name or "").strip()
    if not name:
        return state, None
    return replace(state, model_name=name, status_message=f"Model: {name}"), None


def _quit(state: AppState, event: Quit) -> Result:
    return state, effects.Quit()


_HANDLERS: Dict[Type, Callable[[AppState, object], Result]] = {
    SubmitRequest: _submit,
    SessionStarted: _session_started,
    AnswerChunk: _answer,
    ReasoningChunk: _reasoning,
    StreamEnded: _ended,
    StreamFailed: _failed,
    CancelRequested: _cancel,
    ScrollTo: _scroll_to,
    ScrollBy: _scroll_by,
    Resize: _resize,
    NewConversation: _new_conversation,
    CycleEffort: _cycle_effort,
    SelectModel: _select_model,
    Quit: _quit,
}


def update(state: AppState, event: object) -> Result:
    """Apply ``event`` to ``state``; unknown events leave the state unchanged."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return state, None
    return handler(state, event)


__all__ = [
    "update",
    "STATUS_SENDING",
    "STATUS_RECEIVING",
    "STATUS_THINKING",
    "STATUS_COMPLETE",
    "STATUS_CANCELLED",
    "STATUS_NEW_CONVERSATION",
]
