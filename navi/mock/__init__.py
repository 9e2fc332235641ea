"""Mock provider package (no network)."""

from .client import MockProvider, ScriptedReply

__all__ = ["MockProvider", "ScriptedReply"]
