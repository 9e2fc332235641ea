"""Split DTO modules; import from ``navi.base.models`` instead."""

from .effort import Effort
from .segment import Segment, SegmentStatus, Source
from .usage_stats import UsageStats

__all__ = ["Effort", "Segment", "SegmentStatus", "Source", "UsageStats"]
