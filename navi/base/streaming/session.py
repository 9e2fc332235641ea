"""Session record kept by the ``SessionController``."""
from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Optional

from ..cancellation import CancellationToken


@dataclass
class Session:
    """One streaming request.

    ``finished`` is set by the owner thread when the terminal event of the
    session is admitted; ``cancelled`` mirrors the session token and never
    reverts.
    """

    id: int
    token: CancellationToken = field(repr=False)
    finished: bool = False
    future: Optional[Future] = field(default=None, repr=False, compare=False)

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def live(self) -> bool:
        return not (self.cancelled or self.finished)


__all__ = ["Session"]
