"""Responses-API SSE translation and payload helpers (pure functions)."""
from __future__ import annotations

import json

import pytest

from navi.base.errors import StreamError, StreamErrorKind
from navi.base.models import Effort, Segment, UsageStats
from navi.base.responses_style_parts import (
    UnparsedPayload,
    build_payload,
    default_reasoning,
    iter_sse_data,
    parse_completed_usage,
    segments_to_input,
    translate_sse_data,
    translate_sse_lines,
)
from navi.base.streaming import AnswerFragment, End, ReasoningFragment


def _data(obj: dict) -> str:
    return "data: " + json.dumps(obj)


def test_iter_sse_data_tracks_event_lines_and_skips_comments():
    lines = [
        ": keep-alive",
        "event: response.output_text.delta",
        'data: {"delta": "Hi"}',
        "",
        b'data: {"type": "response.created"}',
        "data: [DONE]",
    ]
    assert list(iter_sse_data(lines)) == [
        ("response.output_text.delta", '{"delta": "Hi"}'),
        (None, '{"type": "response.created"}'),
        (None, "[DONE]"),
    ]


def test_translate_delta_events():
    assert translate_sse_data(None, json.dumps({"type": "response.output_text.delta", "delta": "a"})) == AnswerFragment("a")
    assert translate_sse_data("response.reasoning_text.delta", json.dumps({"delta": "r"})) == ReasoningFragment("r")
    assert translate_sse_data(
        None, json.dumps({"type": "response.reasoning_summary_text.delta", "delta": "s"})
    ) == ReasoningFragment("s")
    assert translate_sse_data(None, json.dumps({"type": "response.output_text.delta", "delta": ""})) is None


def test_translate_skips_lifecycle_events_and_done_marker():
    assert translate_sse_data(None, "[DONE]") is None
    assert translate_sse_data(None, json.dumps({"type": "response.in_progress"})) is None


@pytest.mark.parametrize(
    ("event_type", "data", "reason"),
    [
        (None, "{broken", "invalid json"),
        (None, "[1, 2]", "payload is not an object"),
        ("response.output_text.delta", json.dumps({"delta": 5}), "delta missing"),
    ],
)
def test_unparseable_payloads_are_passed_through(event_type, data, reason):
    result = translate_sse_data(event_type, data)
    assert isinstance(result, UnparsedPayload)
    assert result.reason == reason


def test_completed_event_carries_usage():
    payload = {
        "type": "response.completed",
        "response": {"status": "completed", "usage": {"input_tokens": 9, "output_tokens": 3, "total_tokens": 12}},
    }
    assert translate_sse_data(None, json.dumps(payload)) == End(
        UsageStats(input_tokens=9, output_tokens=3, total_tokens=12, finish_reason="completed")
    )
    assert parse_completed_usage({"response": {"status": "incomplete"}}) == UsageStats(finish_reason="incomplete")
    assert parse_completed_usage({}) is None


def test_failed_and_error_events_raise_provider_rejected():
    failed = {"type": "response.failed", "response": {"error": {"message": "model overloaded"}}}
    with pytest.raises(StreamError) as info:
        translate_sse_data(None, json.dumps(failed), provider="openrouter")
    assert info.value.kind is StreamErrorKind.PROVIDER_REJECTED
    assert info.value.message == "model overloaded"
    assert info.value.raw == failed

    with pytest.raises(StreamError) as info:
        translate_sse_data("error", json.dumps({"message": "bad request"}))
    assert info.value.message == "bad request"


def test_translate_lines_stops_after_end():
    lines = [
        _data({"type": "response.created"}),
        _data({"type": "response.output_text.delta", "delta": "Hel"}),
        _data({"type": "response.output_text.delta", "delta": "lo"}),
        _data({"type": "response.completed", "response": {}}),
        _data({"type": "response.output_text.delta", "delta": "ignored"}),
    ]
    assert list(translate_sse_lines(lines)) == [AnswerFragment("Hel"), AnswerFragment("lo"), End(None)]


def test_segments_to_input_roles_and_skips():
    reasoning_only = Segment.pending_model().extended(reasoning="thinking").completed()
    segments = [
        Segment.directive("sys"),
        Segment.user("hi"),
        Segment.pending_model().extended(answer="hello", reasoning="secret").completed(),
        Segment.user("again"),
        reasoning_only,
    ]
    assert segments_to_input(segments) == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "user", "content": "again"},
    ]


def test_build_payload_and_reasoning():
    assert default_reasoning(Effort.AUTO) == {"enabled": True}
    assert default_reasoning(Effort.HIGH) == {"effort": "high"}
    payload = build_payload("m", [Segment.user("q")], reasoning={"effort": "low"}, max_output_tokens=100)
    assert payload == {
        "model": "m",
        "input": [{"role": "user", "content": "q"}],
        "stream": True,
        "reasoning": {"effort": "low"},
        "max_output_tokens": 100,
    }
    assert "reasoning" not in build_payload("m", [])
