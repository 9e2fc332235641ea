"""Request payload builders for Responses-API providers.

Pure functions: no I/O, no logging.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..models import Effort, Segment, Source

ROLE_BY_SOURCE = {
    Source.DIRECTIVE: "system",
    Source.USER: "user",
    Source.MODEL: "assistant",
}


def segments_to_input(segments: Sequence[Segment]) -> List[Dict[str, str]]:
    """Translate segments into the ``input`` message array.

    Only ``answer_text`` is sent; reasoning is model output and never goes
    back to the provider. Model segments with no answer text (a cancelled
    reply that only produced reasoning) are skipped.
    """
    items: List[Dict[str, str]] = []
    for seg in segments:
        role = ROLE_BY_SOURCE.get(seg.source)
        if role is None:
            continue
        if seg.source is Source.MODEL and not seg.answer_text:
            continue
        items.append({"role": role, "content": seg.answer_text})
    return items


def default_reasoning(effort: Effort) -> Optional[Dict[str, Any]]:
    """``AUTO`` enables reasoning and lets the model pick; others pin the effort."""
    if effort is Effort.AUTO:
        return {"enabled": True}
    return {"effort": effort.value}


def build_payload(
    model: str,
    segments: Sequence[Segment],
    *,
    reasoning: Optional[Dict[str, Any]] = None,
    max_output_tokens: Optional[int] = None,
) -> Dict[str, Any]:
    """Assemble the JSON body for ``POST /responses`` with ``stream: true``."""
    payload: Dict[str, Any] = {
        "model": model,
        "input": segments_to_input(segments),
        "stream": True,
    }
    if reasoning is not None:
        payload["reasoning"] = reasoning
    if max_output_tokens is not None:
        payload["max_output_tokens"] = max_output_tokens
    return payload


__all__ = ["ROLE_BY_SOURCE", "segments_to_input", "default_reasoning", "build_payload"]
