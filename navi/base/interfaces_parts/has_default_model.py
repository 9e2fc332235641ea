"""HasDefaultModel Protocol (single-class module)."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class HasDefaultModel(Protocol):
    """Interface for providers that expose the model they will request."""

    def default_model(self) -> Optional[str]:  # pragma: no cover - trivial
        return None
