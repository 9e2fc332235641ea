"""
Usage statistics reported when a stream completes.

Token counts come from the provider's completion payload; timing fields are
measured by the network task (time to first token, generation duration).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class UsageStats:
    """Token and timing figures for one response."""

    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    ttft_ms: Optional[int] = None
    generation_duration_ms: Optional[int] = None
    tokens_per_sec: Optional[float] = None
    finish_reason: Optional[str] = None

    def with_timing(self, *, ttft_ms: Optional[int], duration_ms: Optional[int]) -> "UsageStats":
        """Return a copy carrying measured timings and the derived throughput."""
        tps = self.tokens_per_sec
        if tps is None and self.output_tokens and duration_ms:
            tps = round(self.output_tokens / (duration_ms / 1000.0), 1)
        return replace(
            self,
            ttft_ms=self.ttft_ms if ttft_ms is None else ttft_ms,
            generation_duration_ms=self.generation_duration_ms if duration_ms is None else duration_ms,
            tokens_per_sec=tps,
        )

    def display_summary(self) -> str:
        """Render a compact one-line status, e.g. ``100 in | 30 out | TTFT 250ms``."""
        parts: List[str] = []
        if self.input_tokens is not None:
            parts.append(f"{self.input_tokens} in")
        if self.output_tokens is not None:
            parts.append(f"{self.output_tokens} out")
        if self.ttft_ms is not None:
            parts.append(f"TTFT {self.ttft_ms}ms")
        if self.tokens_per_sec is not None:
            parts.append(f"{self.tokens_per_sec:.1f} tok/s")
        return " | ".join(parts) if parts else "Response complete."

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["UsageStats"]
