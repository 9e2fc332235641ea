"""navi package

Terminal chat client with a streaming session engine.

Purpose:
    Stream replies from chat model providers into a single-writer reducer.
    Network work runs on worker threads that only enqueue session-tagged
    deltas; all state changes happen on the owner thread.

Public API (re-exported):
    - Version: ``__version__``
    - Runtime: :class:`ChatRuntime`
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Errors: :class:`StreamError`, :class:`StreamErrorKind`
"""

from .base.errors import StreamError, StreamErrorKind
from .base.factory import ProviderFactory, UnknownProviderError
from .base.models import Effort, Segment, UsageStats
from .service.runtime import ChatRuntime

__version__ = "0.1.0"


def create(provider_name: str, **kwargs):
    """Instantiate a provider adapter by canonical name (e.g. ``"mock"``).

    Raises:
        UnknownProviderError: Unknown name or invalid constructor arguments.
    """
    return ProviderFactory.create(provider_name, **kwargs)


__all__ = [
    "__version__",
    "create",
    "ChatRuntime",
    "ProviderFactory",
    "UnknownProviderError",
    "StreamError",
    "StreamErrorKind",
    "Effort",
    "Segment",
    "UsageStats",
]
