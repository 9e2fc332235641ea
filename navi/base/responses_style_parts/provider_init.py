"""Initialization parameters shared by Responses-API providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..models import Effort


@dataclass
class _ProviderInit:
    """Constructor bundle for ``BaseResponsesStyleProvider``.

    ``requires_api_key`` controls whether a missing key fails the stream
    before any I/O (hosted gateways) or is simply omitted (local servers).
    """

    provider_name: str
    model: str
    base_url: str
    api_key: Optional[str] = None
    effort: Effort = Effort.AUTO
    max_output_tokens: Optional[int] = None
    requires_api_key: bool = True
    logger_name: Optional[str] = None
