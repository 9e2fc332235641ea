"""ProviderAdapter Protocol (single-class module).

The seam between the session engine and a concrete model provider.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, Sequence, runtime_checkable

from ..models import Effort, Segment
from ..streaming.raw_events import RawProviderEvent


@runtime_checkable
class ProviderAdapter(Protocol):
    """Opens one incremental response stream per request.

    ``open_stream`` may block (connection setup happens on the network task,
    never on the owner thread). It yields fragments in arrival order and
    should finish with ``End``; clean exhaustion is treated the same way.
    Failures are raised (``ConnectionError``, ``StreamError`` or transport
    exceptions) and converted to a single ``StreamFailed`` by the decoder.
    """

    provider_name: str

    def open_stream(
        self,
        segments: Sequence[Segment],
        *,
        effort: Optional[Effort] = None,
        model: Optional[str] = None,
    ) -> Iterator[RawProviderEvent]:  # pragma: no cover - interface
        """Start a request for ``segments`` and iterate its raw events.

        ``effort`` and ``model`` override the adapter's configured values for
        this request only.
        """
        ...
