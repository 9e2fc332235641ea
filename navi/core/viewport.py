"""Viewport synchronizer: decides whether the newest content is visible.

Geometry only. ``offset`` is the index of the first visible content row,
counted from the top; the view shows rows ``[offset, offset + viewport_height)``.

    unseen      = content_height > offset + viewport_height
    bottom      = max(0, content_height - viewport_height)

``follow`` (stick-to-bottom) is set while the user sits at the bottom; when
set, content growth moves the offset to the new bottom before ``unseen`` is
recomputed, so following never produces an unseen indicator.
"""
from __future__ import annotations

import textwrap
from dataclasses import dataclass, replace
from typing import Iterable

from ..base.models import Segment
from ..config.defaults import DEFAULT_CONTENT_WIDTH, DEFAULT_VIEWPORT_HEIGHT

# Rows drawn around each segment's text: one header, one blank separator.
SEGMENT_CHROME_ROWS = 2


def recompute(offset: int, viewport_height: int, content_height: int) -> bool:
    """Return True when content exists below the visible window."""
    return content_height > offset + viewport_height


def bottom_offset(content_height: int, viewport_height: int) -> int:
    return max(0, content_height - viewport_height)


def clamp(offset: int, content_height: int, viewport_height: int) -> int:
    return max(0, min(offset, bottom_offset(content_height, viewport_height)))


def _wrapped_rows(text: str, width: int) -> int:
    if not text:
        return 0
    rows = 0
    for line in text.split("\n"):
        rows += max(1, len(textwrap.wrap(line, width=width, replace_whitespace=False)))
    return rows


def measure_segment(segment: Segment, width: int) -> int:
    """Rows needed to draw ``segment`` at ``width`` columns."""
    width = max(1, width)
    rows = SEGMENT_CHROME_ROWS + _wrapped_rows(segment.answer_text, width)
    if segment.reasoning_text:
        rows += _wrapped_rows(segment.reasoning_text, width)
    return rows


def measure_segments(segments: Iterable[Segment], width: int) -> int:
    """Total content height for ``segments`` at ``width`` columns."""
    return sum(measure_segment(seg, width) for seg in segments)


@dataclass(frozen=True)
class ViewportState:
    """Scroll position and geometry of the content view.

    Always build new states through the methods below; they keep ``offset``
    clamped and ``unseen`` derived from geometry.
    """

    offset: int = 0
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    content_height: int = 0
    content_width: int = DEFAULT_CONTENT_WIDTH
    follow: bool = True
    unseen: bool = False

    @property
    def bottom(self) -> int:
        return bottom_offset(self.content_height, self.viewport_height)

    @property
    def at_bottom(self) -> bool:
        return self.offset >= self.bottom

    def _settled(self, offset: int, follow: bool) -> "ViewportState":
        offset = clamp(offset, self.content_height, self.viewport_height)
        return replace(
            self,
            offset=offset,
            follow=follow,
            unseen=recompute(offset, self.viewport_height, self.content_height),
        )

    def with_content(self, content_height: int) -> "ViewportState":
        """Apply a new content height (growth while streaming, or a reset)."""
        grown = replace(self, content_height=max(0, content_height))
        return grown._settled(grown.bottom if self.follow else self.offset, self.follow)

    def scroll_to(self, offset: int) -> "ViewportState":
        """Scroll to ``offset`` (clamped); reaching the bottom re-enables follow."""
        clamped = clamp(offset, self.content_height, self.viewport_height)
        return self._settled(clamped, clamped >= self.bottom)

    def scroll_to_bottom(self) -> "ViewportState":
        return self.scroll_to(self.bottom)

    def resized(self, viewport_height: int, content_width: int, content_height: int) -> "ViewportState":
        """Apply new terminal geometry and the content height measured for it."""
        sized = replace(
            self,
            viewport_height=max(0, viewport_height),
            content_width=max(1, content_width),
            content_height=max(0, content_height),
        )
        return sized._settled(sized.bottom if self.follow else self.offset, self.follow)


__all__ = [
    "ViewportState",
    "recompute",
    "bottom_offset",
    "clamp",
    "measure_segment",
    "measure_segments",
    "SEGMENT_CHROME_ROWS",
]
