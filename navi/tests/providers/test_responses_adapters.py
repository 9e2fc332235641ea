"""OpenRouter and LM Studio adapters against an in-process HTTP transport.

``httpx.MockTransport`` answers ``POST /responses`` with canned SSE bodies,
so the whole adapter path (headers, payload, status handling, SSE
translation) runs without network access.
"""
from __future__ import annotations

import json
from typing import Callable, List

import httpx
import pytest

from navi.base.constants import MISSING_API_KEY_ERROR
from navi.base.errors import StreamError, StreamErrorKind
from navi.base.models import Effort, Segment, UsageStats
from navi.base.streaming import AnswerFragment, End, ReasoningFragment, SessionController, StreamFailed
from navi.lmstudio import LMStudioProvider
from navi.openrouter import OpenRouterProvider

SEGMENTS = [Segment.directive("sys"), Segment.user("hello")]

SSE_BODY = "\n".join(
    [
        "event: response.created",
        'data: {"type": "response.created"}',
        "",
        'data: {"type": "response.reasoning_text.delta", "delta": "Thinking"}',
        "",
        'data: {"type": "response.output_text.delta", "delta": "Hi"}',
        "",
        'data: {"type": "response.output_text.delta", "delta": " there"}',
        "",
        'data: {"type": "response.completed", "response": {"status": "completed", '
        '"usage": {"input_tokens": 4, "output_tokens": 2, "total_tokens": 6}}}',
        "",
        "data: [DONE]",
        "",
    ]
)


def _client(base_url: str, handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(base_url=base_url, transport=httpx.MockTransport(handler))


def _recording_handler(requests: List[httpx.Request], status: int = 200, body: str = SSE_BODY):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, text=body, headers={"content-type": "text/event-stream"})

    return handler


def test_openrouter_streams_fragments_and_usage():
    requests: List[httpx.Request] = []
    client = _client("https://openrouter.test/api/v1", _recording_handler(requests))
    provider = OpenRouterProvider(api_key="sk-or-v1-abc", model="vendor/model", http_client=client)

    events = list(provider.open_stream(SEGMENTS))

    assert events == [
        ReasoningFragment("Thinking"),
        AnswerFragment("Hi"),
        AnswerFragment(" there"),
        End(UsageStats(input_tokens=4, output_tokens=2, total_tokens=6, finish_reason="completed")),
    ]
    (request,) = requests
    assert request.url.path == "/api/v1/responses"
    assert request.headers["authorization"] == "Bearer sk-or-v1-abc"
    assert request.headers["accept"] == "text/event-stream"
    assert request.headers["x-title"] == "navi"
    body = json.loads(request.content)
    assert body["model"] == "vendor/model"
    assert body["stream"] is True
    assert body["input"] == [{"role": "system", "content": "sys"}, {"role": "user", "content": "hello"}]
    assert "reasoning" not in body


def test_openrouter_sends_explicit_effort():
    requests: List[httpx.Request] = []
    provider = OpenRouterProvider(
        api_key="sk-or-v1-abc",
        http_client=_client("https://openrouter.test/api/v1", _recording_handler(requests)),
    )
    provider.effort = Effort.MEDIUM
    list(provider.open_stream(SEGMENTS))
    assert json.loads(requests[0].content)["reasoning"] == {"effort": "medium"}


def test_per_request_effort_and_model_leave_adapter_defaults_alone():
    requests: List[httpx.Request] = []
    provider = OpenRouterProvider(
        api_key="sk-or-v1-abc",
        model="vendor/default",
        http_client=_client("https://openrouter.test/api/v1", _recording_handler(requests)),
    )
    list(provider.open_stream(SEGMENTS, effort=Effort.HIGH, model="vendor/other"))
    list(provider.open_stream(SEGMENTS))

    first, second = (json.loads(r.content) for r in requests)
    assert first["model"] == "vendor/other" and first["reasoning"] == {"effort": "high"}
    assert second["model"] == "vendor/default" and "reasoning" not in second
    assert provider.effort is Effort.AUTO


def test_openrouter_missing_key_fails_before_io():
    requests: List[httpx.Request] = []
    provider = OpenRouterProvider(http_client=_client("https://openrouter.test/api/v1", _recording_handler(requests)))
    with pytest.raises(StreamError) as info:
        list(provider.open_stream(SEGMENTS))
    assert info.value.kind is StreamErrorKind.PROVIDER_REJECTED
    assert info.value.message == MISSING_API_KEY_ERROR
    assert requests == []


def test_openrouter_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-v1-env")
    requests: List[httpx.Request] = []
    provider = OpenRouterProvider(http_client=_client("https://openrouter.test/api/v1", _recording_handler(requests)))
    list(provider.open_stream(SEGMENTS))
    assert requests[0].headers["authorization"] == "Bearer sk-or-v1-env"


def test_non_2xx_is_provider_rejected_with_body():
    requests: List[httpx.Request] = []
    client = _client("https://openrouter.test/api/v1", _recording_handler(requests, 401, '{"error": "bad key"}'))
    provider = OpenRouterProvider(api_key="sk-or-v1-abc", http_client=client)
    with pytest.raises(StreamError) as info:
        list(provider.open_stream(SEGMENTS))
    assert info.value.status == 401
    assert info.value.kind is StreamErrorKind.PROVIDER_REJECTED
    assert "bad key" in info.value.message


def test_lmstudio_needs_no_key_and_sends_auto_reasoning(monkeypatch):
    monkeypatch.setenv("LM_STUDIO_BASE_URL", "http://gpu-box:1234/v1")
    requests: List[httpx.Request] = []
    provider = LMStudioProvider(http_client=_client("http://gpu-box:1234/v1", _recording_handler(requests)))

    assert provider.base_url == "http://gpu-box:1234/v1"
    assert provider.provider_name == "lmstudio"
    events = list(provider.open_stream(SEGMENTS))
    assert events[-1] == End(UsageStats(input_tokens=4, output_tokens=2, total_tokens=6, finish_reason="completed"))
    (request,) = requests
    assert "authorization" not in request.headers
    body = json.loads(request.content)
    assert body["reasoning"] == {"enabled": True}
    assert body["max_output_tokens"] > 0


def test_transport_error_surfaces_as_network_failure_through_controller():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = LMStudioProvider(http_client=_client("http://localhost:1234/v1", handler))
    controller = SessionController(provider, overall_timeout=0)
    try:
        sid = controller.start(SEGMENTS)
        event = controller.events.get(timeout=3)
    finally:
        controller.shutdown()
    assert event == StreamFailed(sid, StreamErrorKind.NETWORK, "connection refused")


def test_failed_event_mid_stream_is_provider_rejected_through_controller():
    body = "\n".join(
        [
            'data: {"type": "response.output_text.delta", "delta": "par"}',
            "",
            'data: {"type": "response.failed", "response": {"error": {"message": "quota"}}}',
            "",
        ]
    )
    provider = OpenRouterProvider(
        api_key="sk-or-v1-abc",
        http_client=_client("https://openrouter.test/api/v1", _recording_handler([], 200, body)),
    )
    controller = SessionController(provider, overall_timeout=0)
    try:
        controller.start(SEGMENTS)
        first = controller.events.get(timeout=3)
        second = controller.events.get(timeout=3)
    finally:
        controller.shutdown()
    assert first.text == "par"
    assert isinstance(second, StreamFailed)
    assert second.kind is StreamErrorKind.PROVIDER_REJECTED
    assert "quota" in second.message
