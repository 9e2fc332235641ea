"""OpenRouter provider adapter (Responses API over HTTP).

Summary:
- Streams ``POST {base_url}/responses`` with ``stream: true`` via ``httpx``.
- Requires an API key (``OPENROUTER_API_KEY`` or config file); a missing key
  fails the session as ``PROVIDER_REJECTED`` without any I/O.
- SSE translation, payload building and error mapping live in
  ``navi.base.responses_style_parts``; this module only configures them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.models import Effort
from ..base.responses_style_parts import BaseResponsesStyleProvider, _ProviderInit
from ..config import get_provider_config
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_MODEL
from .helpers import attribution_headers, openrouter_reasoning


class OpenRouterProvider(BaseResponsesStyleProvider):
    """OpenRouter adapter.

    Parameters:
        api_key: Explicit key; otherwise resolved from provider config.
        model: Model slug; otherwise resolved from provider config.
        base_url: API base URL; defaults to ``https://openrouter.ai/api/v1``.
        effort: Initial reasoning effort.
        http_client: Pre-built ``httpx.Client`` (tests inject a mock transport).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        effort: Effort = Effort.AUTO,
        max_output_tokens: Optional[int] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        cfg = get_provider_config("openrouter")
        super().__init__(
            _ProviderInit(
                provider_name="openrouter",
                model=model or cfg.get("model", OPENROUTER_DEFAULT_MODEL),
                base_url=base_url or cfg.get("base_url", OPENROUTER_DEFAULT_BASE_URL),
                api_key=api_key or cfg.get("api_key"),
                effort=effort,
                max_output_tokens=max_output_tokens,
                requires_api_key=True,
                logger_name="navi.providers.openrouter",
            ),
            http_client=http_client,
        )

    def reasoning_config(self, effort: Effort) -> Optional[Dict[str, Any]]:
        return openrouter_reasoning(effort)

    def _build_headers(self) -> Dict[str, str]:
        headers = super()._build_headers()
        headers.update(attribution_headers())
        return headers


__all__ = ["OpenRouterProvider"]
