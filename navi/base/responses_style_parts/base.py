"""BaseResponsesStyleProvider: shared streaming adapter for Responses-API servers.

Purpose:
- Implement ``ProviderAdapter.open_stream`` once for every provider speaking
  the OpenAI Responses API over server-sent events (OpenRouter, LM Studio).
  Subclasses only supply configuration and, where needed, their own
  reasoning-config mapping.

External dependencies:
- ``httpx`` streaming (``client.stream("POST", "/responses")``) through the
  pooled client from ``navi.base.http``.

Failure modes:
- Missing API key (when required): ``StreamError(PROVIDER_REJECTED)`` before
  any I/O.
- Non-2xx answer: ``StreamError(PROVIDER_REJECTED, status=...)`` carrying
  the response body.
- Transport errors and timeouts propagate as ``httpx`` exceptions and are
  classified by the stream decoder.

Timeout strategy:
- Connect and idle-read timeouts come from the pooled client
  (``TimeoutConfig``); the overall ceiling is applied by the session
  controller around ``open_stream``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional, Sequence

import httpx

from ..constants import MISSING_API_KEY_ERROR, RESPONSES_PATH
from ..errors import StreamError, StreamErrorKind
from ..http import get_httpx_client
from ..logging import LogContext, get_logger, log_event
from ..models import Effort, Segment
from .payload import build_payload, default_reasoning
from .provider_init import _ProviderInit
from .sse import translate_sse_lines


class BaseResponsesStyleProvider:
    """Reusable adapter for Responses-API providers.

    ``effort`` and the configured model are defaults; ``open_stream`` accepts
    per-request overrides so concurrent requests never share mutable state.
    """

    def __init__(self, init: _ProviderInit, *, http_client: Optional[httpx.Client] = None) -> None:
        self._provider_name = init.provider_name
        self._model = init.model
        self._base_url = init.base_url
        self._api_key = init.api_key
        self._max_output_tokens = init.max_output_tokens
        self._requires_api_key = init.requires_api_key
        self._http_client = http_client
        self._logger = get_logger(init.logger_name or f"navi.providers.{init.provider_name}")
        self.effort: Effort = init.effort

    @property
    def provider_name(self) -> str:
        return self._provider_name

    def default_model(self) -> Optional[str]:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    # ----- Overridable hooks -----
    def reasoning_config(self, effort: Effort) -> Optional[Dict[str, Any]]:
        """Map ``effort`` to the ``reasoning`` request field (``None`` omits it)."""
        return default_reasoning(effort)

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "text/event-stream"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._base_url, purpose=f"{self._provider_name}.stream")

    # ----- ProviderAdapter -----
    def open_stream(
        self,
        segments: Sequence[Segment],
        *,
        effort: Optional[Effort] = None,
        model: Optional[str] = None,
    ) -> Iterator[object]:
        """POST the conversation and yield raw events as SSE lines arrive.

        Generator: nothing happens until the first ``next()``, which runs on
        the network task.
        """
        effort = self.effort if effort is None else effort
        model = model or self._model
        ctx = LogContext(provider=self._provider_name, model=model)
        if self._requires_api_key and not self._api_key:
            raise StreamError(
                StreamErrorKind.PROVIDER_REJECTED,
                MISSING_API_KEY_ERROR,
                provider=self._provider_name,
            )
        payload = build_payload(
            model,
            segments,
            reasoning=self.reasoning_config(effort),
            max_output_tokens=self._max_output_tokens,
        )
        log_event(
            self._logger,
            "provider.request",
            ctx,
            input_count=len(payload["input"]),
            effort=effort.value,
        )
        with self._client().stream("POST", RESPONSES_PATH, json=payload, headers=self._build_headers()) as response:
            if not response.is_success:
                body = response.read().decode("utf-8", errors="replace").strip()
                log_event(
                    self._logger,
                    "provider.rejected",
                    ctx,
                    level=logging.WARNING,
                    status=response.status_code,
                    body=body[:500],
                )
                raise StreamError(
                    StreamErrorKind.PROVIDER_REJECTED,
                    body or response.reason_phrase,
                    provider=self._provider_name,
                    status=response.status_code,
                )
            yield from translate_sse_lines(response.iter_lines(), provider=self._provider_name)


__all__ = ["BaseResponsesStyleProvider"]
