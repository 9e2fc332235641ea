"""Split modules for Responses-API provider base abstractions.

Re-exports provide a stable import surface for the concrete adapters.
"""

from .base import BaseResponsesStyleProvider
from .payload import build_payload, default_reasoning, segments_to_input
from .provider_init import _ProviderInit
from .sse import UnparsedPayload, iter_sse_data, parse_completed_usage, translate_sse_data, translate_sse_lines

__all__ = [
    "BaseResponsesStyleProvider",
    "_ProviderInit",
    "build_payload",
    "default_reasoning",
    "segments_to_input",
    "UnparsedPayload",
    "iter_sse_data",
    "parse_completed_usage",
    "translate_sse_data",
    "translate_sse_lines",
]
