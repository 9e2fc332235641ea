"""LM Studio provider adapter (local inference server, Responses API).

LM Studio 0.3.29+ serves ``/v1/responses`` with streaming and reasoning
effort. No API key is needed; the base URL comes from ``LM_STUDIO_BASE_URL``
(or ``LMSTUDIO_BASE_URL`` / the config file) and defaults to
``http://localhost:1234/v1``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.models import Effort
from ..base.responses_style_parts import BaseResponsesStyleProvider, _ProviderInit
from ..config import get_provider_config
from ..config.defaults import DEFAULT_MAX_OUTPUT_TOKENS, LMSTUDIO_DEFAULT_BASE_URL, LMSTUDIO_DEFAULT_MODEL


class LMStudioProvider(BaseResponsesStyleProvider):
    """Adapter for a local LM Studio server."""

    def __init__(
        self,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        effort: Effort = Effort.AUTO,
        max_output_tokens: Optional[int] = DEFAULT_MAX_OUTPUT_TOKENS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        cfg = get_provider_config("lmstudio")
        super().__init__(
            _ProviderInit(
                provider_name="lmstudio",
                model=model or cfg.get("model", LMSTUDIO_DEFAULT_MODEL),
                base_url=base_url or cfg.get("base_url", LMSTUDIO_DEFAULT_BASE_URL),
                api_key=cfg.get("api_key"),
                effort=effort,
                max_output_tokens=max_output_tokens,
                requires_api_key=False,
                logger_name="navi.providers.lmstudio",
            ),
            http_client=http_client,
        )


__all__ = ["LMStudioProvider"]
