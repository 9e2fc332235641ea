"""Service layer: the owner-loop runtime and the terminal shell."""

from .runtime import ChatRuntime

__all__ = ["ChatRuntime"]
