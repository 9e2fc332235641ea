"""Reasoning effort levels requested from providers."""
from __future__ import annotations

from enum import Enum


class Effort(str, Enum):
    """Amount of reasoning the model is asked to spend.

    ``AUTO`` lets the model decide; ``NONE`` disables reasoning entirely.
    """

    AUTO = "auto"
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def next(self) -> "Effort":
        """Cycle to the next level (wraps around)."""
        order = (Effort.NONE, Effort.AUTO, Effort.LOW, Effort.MEDIUM, Effort.HIGH)
        return order[(order.index(self) + 1) % len(order)]

    @property
    def label(self) -> str:
        return "Off" if self is Effort.NONE else self.value.capitalize()


__all__ = ["Effort"]
