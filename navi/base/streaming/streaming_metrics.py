"""Streaming metrics for one session.

Measured by the network task and folded into ``UsageStats`` when the
stream ends.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..models import UsageStats


@dataclass
class StreamMetrics:
    """Counters and timings collected while a stream is consumed.

    ``time_to_first_token_ms`` is measured from ``start`` to the first
    non-empty fragment; ``total_duration_ms`` from the first fragment to the
    terminal event.
    """

    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    emitted: int = 0
    started_at: Optional[float] = None
    first_token_at: Optional[float] = None
    time_to_first_token_ms: Optional[int] = None
    total_duration_ms: Optional[int] = None

    def start(self) -> None:
        self.started_at = self.clock()

    def record_fragment(self, text: str) -> None:
        self.emitted += 1
        if self.first_token_at is None and text:
            self.first_token_at = self.clock()
            if self.started_at is not None:
                self.time_to_first_token_ms = int((self.first_token_at - self.started_at) * 1000)

    def finish(self) -> None:
        if self.first_token_at is not None:
            self.total_duration_ms = int((self.clock() - self.first_token_at) * 1000)

    def apply_to(self, usage: Optional[UsageStats]) -> UsageStats:
        """Return ``usage`` (or an empty ``UsageStats``) carrying the measured timings."""
        return (usage or UsageStats()).with_timing(
            ttft_ms=self.time_to_first_token_ms,
            duration_ms=self.total_duration_ms,
        )


__all__ = ["StreamMetrics"]
