"""Provider-agnostic DTOs (public facade over ``models_parts``)."""

from .models_parts import Effort, Segment, SegmentStatus, Source, UsageStats

__all__ = ["Effort", "Segment", "SegmentStatus", "Source", "UsageStats"]
