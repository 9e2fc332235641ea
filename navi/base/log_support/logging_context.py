"""Structured logging context object for the session engine.

Defines :class:`LogContext`, a dataclass carrying fields shared by every
event of one streaming session (provider, model, session id) plus free-form
extra metadata. ``to_dict`` merges ``extra`` and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for session and provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    session_id: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def for_session(self, session_id: int) -> "LogContext":
        """Return a copy bound to ``session_id``."""
        return replace(self, session_id=session_id, extra=dict(self.extra))


__all__ = ["LogContext"]
