"""Deterministic mock provider for offline use and tests.

Purpose
-------
Implement ``ProviderAdapter`` without network traffic. Replies come from
three places, in order:

1. an explicit ``script`` of ``ScriptedReply`` values (consumed in order,
   the last one repeating),
2. the JSON fixture catalog bundled under ``navi.mock.fixtures``, keyed by
   the lower-cased last user message,
3. an echo of the last user message.

A ``ScriptedReply`` can also raise after its fragments, or sleep between
fragments, so tests can exercise failures, cancellation and timeouts.
"""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from importlib import resources
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Effort, Segment, Source, UsageStats
from ..base.streaming.raw_events import AnswerFragment, End, ReasoningFragment
from ..config.defaults import MOCK_DEFAULT_MODEL

_FIXTURE_RESOURCE = "replies.json"


@dataclass(frozen=True)
class ScriptedReply:
    """One canned response.

    Attributes:
        answer: Answer fragments, emitted after the reasoning fragments.
        reasoning: Reasoning fragments.
        usage: Usage carried by the final ``End``.
        error: Raised after all fragments instead of emitting ``End``.
        extra: Raw values yielded verbatim after the fragments (tests use
            this to feed unrecognized payloads to the decoder).
        end: When False the stream simply stops without ``End``.
        delay: Seconds slept before each fragment.
    """

    answer: Sequence[str] = ()
    reasoning: Sequence[str] = ()
    usage: Optional[UsageStats] = None
    error: Optional[BaseException] = None
    extra: Sequence[object] = ()
    end: bool = True
    delay: float = 0.0


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON reply catalog bundled with the mock provider."""
    data = resources.files("navi.mock.fixtures").joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


def _reply_from_fixture(raw: Dict[str, Any]) -> ScriptedReply:
    usage = raw.get("usage")
    return ScriptedReply(
        answer=tuple(raw.get("answer", ())),
        reasoning=tuple(raw.get("reasoning", ())),
        usage=UsageStats(**usage) if isinstance(usage, dict) else None,
    )


def _echo_reply(prompt: str) -> ScriptedReply:
    words = prompt.split()
    answer: List[str] = ["You said: "] + [w + " " for w in words[:-1]] + words[-1:]
    return ScriptedReply(
        answer=tuple(answer),
        reasoning=("Echoing ", "the prompt."),
        usage=UsageStats(input_tokens=len(words), output_tokens=len(answer), total_tokens=len(words) + len(answer)),
    )


def _last_user_text(segments: Sequence[Segment]) -> str:
    for seg in reversed(segments):
        if seg.source is Source.USER:
            return seg.answer_text
    return ""


class MockProvider:
    """Adapter that replays canned responses instead of calling a live API."""

    def __init__(
        self,
        script: Optional[Iterable[ScriptedReply]] = None,
        *,
        model: Optional[str] = None,
        effort: Effort = Effort.AUTO,
        catalog: Optional[Dict[str, Any]] = None,
        provider: str = "mock",
    ) -> None:
        self._script: List[ScriptedReply] = list(script or ())
        self._catalog = catalog if catalog is not None else load_fixture_catalog()
        self._model = model or str(self._catalog.get("default_model", MOCK_DEFAULT_MODEL))
        self._provider = provider
        self._lock = threading.Lock()
        self._calls = 0
        self.requests: List[Tuple[Segment, ...]] = []
        # (effort, model) each request was opened with
        self.request_options: List[Tuple[Effort, str]] = []
        self.effort = effort
        self._logger = get_logger(f"navi.providers.{provider}")

    @property
    def provider_name(self) -> str:
        return self._provider

    def default_model(self) -> Optional[str]:
        return self._model

    def _select(self, segments: Sequence[Segment], effort: Effort, model: str) -> ScriptedReply:
        with self._lock:
            index = self._calls
            self._calls += 1
            self.requests.append(tuple(segments))
            self.request_options.append((effort, model))
        if self._script:
            return self._script[min(index, len(self._script) - 1)]
        prompt = _last_user_text(segments)
        raw = self._catalog.get("replies", {}).get(prompt.strip().lower())
        if isinstance(raw, dict):
            return _reply_from_fixture(raw)
        return _echo_reply(prompt)

    def open_stream(
        self,
        segments: Sequence[Segment],
        *,
        effort: Optional[Effort] = None,
        model: Optional[str] = None,
    ) -> Iterator[object]:
        effort = self.effort if effort is None else effort
        model = model or self._model
        reply = self._select(segments, effort, model)
        log_event(
            self._logger,
            "provider.request",
            LogContext(provider=self._provider, model=model),
            input_count=len(segments),
            effort=effort.value,
        )
        for text in reply.reasoning:
            if reply.delay:
                time.sleep(reply.delay)
            yield ReasoningFragment(text)
        for text in reply.answer:
            if reply.delay:
                time.sleep(reply.delay)
            yield AnswerFragment(text)
        yield from reply.extra
        if reply.error is not None:
            raise reply.error
        if reply.end:
            yield End(reply.usage)


__all__ = ["MockProvider", "ScriptedReply", "load_fixture_catalog"]
