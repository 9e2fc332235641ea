"""Interfaces (Protocols) split into single-class modules.

Import from ``navi.base.interfaces``; this package only holds the parts.
"""

from .has_default_model import HasDefaultModel
from .provider_adapter import ProviderAdapter

__all__ = ["HasDefaultModel", "ProviderAdapter"]
