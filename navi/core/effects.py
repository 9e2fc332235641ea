"""Effects returned by the reducer and executed by the runtime."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..base.models import Effort, Segment


@dataclass(frozen=True)
class StartSession:
    """Start a streaming request for ``segments`` (the conversation so far).

    ``effort`` and ``model`` are captured for this request; ``model=None``
    uses the adapter's configured model.
    """

    segments: Tuple[Segment, ...]
    effort: Effort = Effort.AUTO
    model: Optional[str] = None


@dataclass(frozen=True)
class CancelSession:
    session_id: int


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[StartSession, CancelSession, Quit]

__all__ = ["StartSession", "CancelSession", "Quit", "Effect"]
