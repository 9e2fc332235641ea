"""Segment store: the ordered, append-only conversation log.

The store is an immutable value; every operation returns a new store, so the
reducer can hand out snapshots without copying and without locks.

Invariants
----------
* Only the last segment may be ``STREAMING``.
* Text only grows by concatenation while a segment is streaming.
* ``STREAMING -> COMPLETE`` is the only status transition.

Violations raise :class:`SegmentStoreError`; they indicate a reducer bug, not
a provider or user error.
"""
from __future__ import annotations

from typing import Iterable, Iterator, Optional, Tuple

from ..base.models import Segment


class SegmentStoreError(RuntimeError):
    """Raised on an operation that would break a store invariant."""


class SegmentStore:
    """Ordered, append-only sequence of segments."""

    __slots__ = ("_items",)

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        items = tuple(segments)
        for seg in items[:-1]:
            if seg.streaming:
                raise SegmentStoreError("only the last segment may be streaming")
        self._items: Tuple[Segment, ...] = items

    # Read API ------------------------------------------------------------
    def snapshot(self) -> Tuple[Segment, ...]:
        return self._items

    @property
    def last(self) -> Optional[Segment]:
        return self._items[-1] if self._items else None

    @property
    def streaming(self) -> bool:
        """True when the last segment is still receiving deltas."""
        last = self.last
        return last is not None and last.streaming

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Segment:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SegmentStore):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"SegmentStore({len(self._items)} segments, streaming={self.streaming})"

    # Write API (returns new stores) --------------------------------------
    def append(self, segment: Segment) -> "SegmentStore":
        if self.streaming:
            raise SegmentStoreError("cannot append while the last segment is streaming")
        return SegmentStore(self._items + (segment,))

    def append_text(self, *, answer: str = "", reasoning: str = "") -> "SegmentStore":
        """Concatenate text onto the streaming last segment."""
        last = self.last
        if last is None or not last.streaming:
            raise SegmentStoreError("no streaming segment to append to")
        if not answer and not reasoning:
            return self
        return SegmentStore(self._items[:-1] + (last.extended(answer=answer, reasoning=reasoning),))

    def complete_last(self) -> "SegmentStore":
        """Mark the last segment complete; a no-op when nothing is streaming."""
        if not self.streaming:
            return self
        return SegmentStore(self._items[:-1] + (self._items[-1].completed(),))

    def without_pending(self) -> Tuple[Segment, ...]:
        """Snapshot minus a trailing empty streaming segment (the request context)."""
        last = self.last
        if last is not None and last.streaming and not last.answer_text and last.reasoning_text is None:
            return self._items[:-1]
        return self._items


__all__ = ["SegmentStore", "SegmentStoreError"]
