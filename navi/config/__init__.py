"""Unified configuration layer.

Goals
-----
* Centralize defaults (models, base URLs, system prompt).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. External config file (JSON or YAML) pointed to by ``NAVI_CONFIG_FILE``
    3. Environment variables (e.g. ``OPENROUTER_MODEL``, ``OPENROUTER_API_KEY``)
    4. In-code overrides passed to the helper (CLI flags)
* Provide single call sites: ``get_provider_config(provider)`` for adapters
  and ``navi.config.settings.load_settings()`` for general settings.

Environment Variable Conventions
--------------------------------
``<PROVIDER>_MODEL``, ``<PROVIDER>_API_KEY``, ``<PROVIDER>_BASE_URL``, e.g.
``OPENROUTER_BASE_URL``. LM Studio additionally honours ``LM_STUDIO_BASE_URL``.

External Config File
--------------------
JSON is tried first, then YAML. Structure example::

    general:
      provider: lmstudio
      reasoning_effort: low
      system_prompt: "You are terse."        # or system_prompt_file: prompt.md
    models:
      - name: anthropic/claude-sonnet-4
        provider: openrouter
        description: default cloud model
    openrouter:
      model: anthropic/claude-sonnet-4
    lmstudio:
      base_url: http://localhost:1234/v1
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .defaults import (
    LMSTUDIO_BASE_URL_ENV,
    LMSTUDIO_DEFAULT_BASE_URL,
    LMSTUDIO_DEFAULT_MODEL,
    MOCK_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key
from .errors import ConfigError

CONFIG_FILE_ENV = "NAVI_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
    "lmstudio": {"model": LMSTUDIO_DEFAULT_MODEL, "base_url": LMSTUDIO_DEFAULT_BASE_URL},
    "mock": {"model": MOCK_DEFAULT_MODEL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}

# provider -> extra env vars honoured for a field (checked after the generic name)
ENV_ALIASES: Dict[str, Dict[str, str]] = {
    "lmstudio": {"base_url": LMSTUDIO_BASE_URL_ENV},
}

_FILE_CACHE: Optional[Tuple[str, Dict[str, Any]]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight ``.env`` loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables win unless they look like placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _parse_config_text(text: str, source: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"cannot parse config file {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {source} must contain a mapping at top level")
    return data


def load_config_file() -> Dict[str, Any]:
    """Return the parsed external config file (empty when unset or missing).

    The result is cached per path; call ``reset_config_cache`` after changing
    ``NAVI_CONFIG_FILE`` or the file contents.

    Raises:
        ConfigError: When the file exists but is neither valid JSON nor YAML.
    """
    global _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV, "")
    if _FILE_CACHE is not None and _FILE_CACHE[0] == path:
        return _FILE_CACHE[1]
    data: Dict[str, Any] = {}
    if path:
        p = Path(path).expanduser()
        if p.is_file():
            data = _parse_config_text(p.read_text(encoding="utf-8"), str(p))
    _FILE_CACHE = (path, data)
    return data


def reset_config_cache() -> None:
    """Forget the cached config file and re-arm the ``.env`` loader."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    for field, var in ENV_ALIASES.get(provider, {}).items():
        if field not in out and (val := os.getenv(var)) is not None:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    Placeholder API keys are dropped.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = load_config_file().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if not cfg.get("api_key"):
        key, _ = resolve_provider_key(name)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key", None)
    return cfg


def get_model(provider: str) -> Optional[str]:
    """Shortcut returning the resolved model for ``provider``."""
    return get_provider_config(provider).get("model")


__all__ = [
    "CONFIG_FILE_ENV",
    "ConfigError",
    "DEFAULTS",
    "get_provider_config",
    "get_model",
    "load_config_file",
    "reset_config_cache",
]
