"""Configuration errors."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when the config file cannot be parsed or settings fail validation."""


__all__ = ["ConfigError"]
