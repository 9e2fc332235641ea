"""Application state owned by the single-threaded reducer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..base.models import Effort, Segment, UsageStats
from ..config.defaults import DEFAULT_CONTENT_WIDTH, DEFAULT_SYSTEM_PROMPT, DEFAULT_VIEWPORT_HEIGHT
from .segments import SegmentStore
from .viewport import ViewportState, measure_segments

WELCOME_STATUS = "Welcome to Navi!"


@dataclass(frozen=True)
class AppState:
    """Everything the UI reads.

    Attributes:
        segments: Conversation log.
        viewport: Scroll state over the rendered log.
        live_session_id: Session whose deltas are accepted; ``None`` while
            idle or between ``SubmitRequest`` and ``SessionStarted``.
        is_loading: A request is in flight (pending or live).
        status_message: One-line status for the status bar.
        error: Detail of the last failure, cleared on the next submit.
        usage: Usage of the last completed response.
        effort: Reasoning effort sent with the next request.
        model_name: Display name of the configured model.
        system_prompt: Text of the directive segment.
    """

    segments: SegmentStore = field(default_factory=SegmentStore)
    viewport: ViewportState = field(default_factory=ViewportState)
    live_session_id: Optional[int] = None
    is_loading: bool = False
    status_message: str = WELCOME_STATUS
    error: Optional[str] = None
    usage: Optional[UsageStats] = None
    effort: Effort = Effort.AUTO
    model_name: str = ""
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    @classmethod
    def initial(
        cls,
        *,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        model_name: str = "",
        effort: Effort = Effort.AUTO,
        viewport_height: int = DEFAULT_VIEWPORT_HEIGHT,
        content_width: int = DEFAULT_CONTENT_WIDTH,
    ) -> "AppState":
        """Fresh state holding only the directive segment."""
        segments = SegmentStore([Segment.directive(system_prompt)]) if system_prompt else SegmentStore()
        viewport = ViewportState(viewport_height=viewport_height, content_width=content_width).with_content(
            measure_segments(segments, content_width)
        )
        return cls(
            segments=segments,
            viewport=viewport,
            effort=effort,
            model_name=model_name,
            system_prompt=system_prompt,
        )

    @property
    def in_flight(self) -> bool:
        return self.is_loading or self.segments.streaming


__all__ = ["AppState", "WELCOME_STATUS"]
