"""Provider Factory utilities.

Purpose
-------
Create the provider adapter the runtime will use for the whole process. The
provider is chosen once at startup; adapters are imported lazily with
``importlib`` so only the selected one is loaded.

Failure semantics
-----------------
No retries or fallbacks: the factory either returns an instance or raises
:class:`UnknownProviderError` with an actionable message.

Scope
-----
Supported providers: ``openrouter``, ``lmstudio`` and ``mock``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered in the factory mapping.
    - The provider module cannot be imported or the adapter class is missing.
    - The adapter constructor raised during initialization.
    """


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create provider adapters from a canonical name (e.g. ``"openrouter"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openrouter": {"module": "navi.openrouter.client", "class": "OpenRouterProvider"},
        "lmstudio": {"module": "navi.lmstudio.client", "class": "LMStudioProvider"},
        "mock": {"module": "navi.mock.client", "class": "MockProvider"},
    }

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider name (case-insensitive).
        **kwargs:
            Adapter constructor kwargs. ``None`` values are dropped so the
            adapter falls back to its configured defaults.

        Raises
        ------
        UnknownProviderError
            Unknown name, import failure, missing class or constructor error.
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(
                f"Unknown provider '{provider}' (supported: {', '.join(cls.supported())})"
            )

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - registry typo
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        clean = {k: v for k, v in kwargs.items() if v is not None}
        try:
            return klass(**clean)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc
        except Exception as exc:  # pragma: no cover - adapter runtime init error
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return supported provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
