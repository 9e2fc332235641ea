"""
Structured stream error exception types.

Provider adapters raise these to tell the network task exactly which
``StreamErrorKind`` a failure belongs to, instead of relying on heuristics.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_kind import StreamErrorKind


@dataclass
class StreamError(Exception):
    """Represents a classified failure raised while opening or reading a stream.

    Attributes:
        kind: Normalized :class:`StreamErrorKind` for the failure.
        message: Human-readable detail suitable for logs and the status line.
        provider: Provider key where the error originated (e.g. ``"openrouter"``).
        status: HTTP status code when the provider answered with a non-2xx.
        raw: Original exception or provider payload, for diagnostics.
    """

    kind: StreamErrorKind
    message: str
    provider: Optional[str] = None
    status: Optional[int] = None
    raw: Any = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = self.provider or "-"
        code = f" (HTTP {self.status})" if self.status is not None else ""
        return f"{where} {self.kind.value}{code}: {self.message}"


class ProtocolError(ValueError):
    """Raised when a provider payload cannot be understood."""


__all__ = ["StreamError", "ProtocolError"]
