"""StreamMetrics timing with a deterministic clock."""
from __future__ import annotations

from navi.base.models import UsageStats
from navi.base.streaming import StreamMetrics


class _Clock:
    def __init__(self) -> None:
        self.t = 100.0

    def __call__(self) -> float:
        return self.t

    def advance(self, ms: float) -> None:
        self.t += ms / 1000.0


def test_ttft_counts_from_start_to_first_non_empty_fragment():
    clock = _Clock()
    m = StreamMetrics(clock=clock)
    m.start()
    clock.advance(50)
    m.record_fragment("")
    clock.advance(200)
    m.record_fragment("Hi")
    clock.advance(500)
    m.record_fragment(" there")
    m.finish()

    assert m.emitted == 3
    assert m.time_to_first_token_ms == 250
    assert m.total_duration_ms == 500


def test_apply_to_merges_timing_and_throughput():
    clock = _Clock()
    m = StreamMetrics(clock=clock)
    m.start()
    clock.advance(100)
    m.record_fragment("x")
    clock.advance(2000)
    m.finish()

    usage = m.apply_to(UsageStats(input_tokens=5, output_tokens=40))
    assert usage.ttft_ms == 100
    assert usage.generation_duration_ms == 2000
    assert usage.tokens_per_sec == 20.0
    assert usage.input_tokens == 5


def test_apply_to_without_fragments_keeps_fields_empty():
    m = StreamMetrics()
    m.start()
    m.finish()
    usage = m.apply_to(None)
    assert usage == UsageStats()
    assert usage.display_summary() == "Response complete."
