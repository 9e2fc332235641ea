"""Server-sent event translation for Responses-API providers.

Purpose:
- Turn ``httpx.Response.iter_lines()`` output into raw provider events:
    ``response.output_text.delta``            -> ``AnswerFragment``
    ``response.reasoning_text.delta``         -> ``ReasoningFragment``
    ``response.reasoning_summary_text.delta`` -> ``ReasoningFragment``
    ``response.completed``                    -> ``End(usage)``
    ``response.failed`` / ``error``           -> ``StreamError(PROVIDER_REJECTED)``
- Other event types (``response.created``, ``response.in_progress``, ...) and
  the ``[DONE]`` marker are skipped.

Notes:
- The event type comes from the ``event:`` line when present, otherwise from
  the ``type`` field of the JSON payload (OpenRouter only sends the latter).
- A data line that is not a JSON object, or a delta event without a string
  ``delta``, is passed through as ``UnparsedPayload``. The stream decoder
  reports it as a protocol failure; these helpers never guess.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from ..constants import SSE_DONE_MARKER
from ..errors import StreamError, StreamErrorKind
from ..models import UsageStats
from ..streaming.raw_events import AnswerFragment, End, ReasoningFragment

ANSWER_EVENTS = frozenset({"response.output_text.delta"})
REASONING_EVENTS = frozenset({"response.reasoning_text.delta", "response.reasoning_summary_text.delta"})
COMPLETED_EVENT = "response.completed"
FAILURE_EVENTS = frozenset({"response.failed", "error"})


@dataclass(frozen=True)
class UnparsedPayload:
    """A data line that could not be understood."""

    event_type: Optional[str]
    data: str
    reason: str


def iter_sse_data(lines: Iterable[Union[str, bytes]]) -> Iterator[Tuple[Optional[str], str]]:
    """Yield ``(event_type, data)`` pairs from raw SSE lines.

    ``event_type`` is the value of the preceding ``event:`` line, reset after
    each data line and at blank lines. Comment lines (``:``) are skipped.
    """
    current_event: Optional[str] = None
    for raw in lines:
        line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else str(raw)
        line = line.strip()
        if not line:
            current_event = None
            continue
        if line.startswith(":"):
            continue
        if line.startswith("event:"):
            current_event = line[6:].strip() or None
            continue
        if line.startswith("data:"):
            yield current_event, line[5:].strip()
            current_event = None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_completed_usage(payload: Dict[str, Any]) -> Optional[UsageStats]:
    """Extract ``UsageStats`` from a ``response.completed`` payload.

    Missing or odd-shaped usage yields ``None`` (or only a finish reason);
    absent metrics never fail a stream.
    """
    response = payload.get("response")
    if not isinstance(response, dict):
        return None
    status = response.get("status") if isinstance(response.get("status"), str) else None
    usage = response.get("usage")
    if not isinstance(usage, dict):
        return UsageStats(finish_reason=status) if status else None
    return UsageStats(
        input_tokens=_as_int(usage.get("input_tokens")),
        output_tokens=_as_int(usage.get("output_tokens")),
        total_tokens=_as_int(usage.get("total_tokens")),
        finish_reason=status,
    )


def _failure_message(payload: Dict[str, Any]) -> str:
    candidates = [payload.get("error"), payload]
    response = payload.get("response")
    if isinstance(response, dict):
        candidates.insert(0, response.get("error"))
    for c in candidates:
        if isinstance(c, dict) and isinstance(c.get("message"), str) and c["message"]:
            return c["message"]
    return "provider reported a failed response"


def translate_sse_data(
    event_type: Optional[str],
    data: str,
    *,
    provider: Optional[str] = None,
) -> Optional[object]:
    """Translate one SSE data line; ``None`` means "nothing to emit".

    Raises:
        StreamError: ``PROVIDER_REJECTED`` for ``response.failed`` and ``error``.
    """
    if data == SSE_DONE_MARKER:
        return None
    try:
        payload = json.loads(data)
    except ValueError:
        return UnparsedPayload(event_type, data, "invalid json")
    if not isinstance(payload, dict):
        return UnparsedPayload(event_type, data, "payload is not an object")
    kind = event_type or payload.get("type")

    if kind in ANSWER_EVENTS or kind in REASONING_EVENTS:
        delta = payload.get("delta")
        if not isinstance(delta, str):
            return UnparsedPayload(kind, data, "delta missing")
        if not delta:
            return None
        return AnswerFragment(delta) if kind in ANSWER_EVENTS else ReasoningFragment(delta)
    if kind == COMPLETED_EVENT:
        return End(parse_completed_usage(payload))
    if kind in FAILURE_EVENTS:
        raise StreamError(
            StreamErrorKind.PROVIDER_REJECTED,
            _failure_message(payload),
            provider=provider,
            raw=payload,
        )
    return None


def translate_sse_lines(
    lines: Iterable[Union[str, bytes]],
    *,
    provider: Optional[str] = None,
) -> Iterator[object]:
    """Yield raw provider events for ``lines``, stopping after ``End``."""
    for event_type, data in iter_sse_data(lines):
        event = translate_sse_data(event_type, data, provider=provider)
        if event is None:
            continue
        yield event
        if isinstance(event, End):
            return


__all__ = [
    "UnparsedPayload",
    "iter_sse_data",
    "parse_completed_usage",
    "translate_sse_data",
    "translate_sse_lines",
]
