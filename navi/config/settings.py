"""Resolved application settings.

Purpose
-------
Collapse the ``general`` section of the config file, ``NAVI_*`` environment
variables and CLI overrides into one validated object consumed by the
runtime and the shell.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.

Failure modes
-------------
- ``ConfigError`` wraps pydantic ``ValidationError`` (unknown provider,
  invalid effort, non-positive queue size, malformed ``models`` entries) so
  callers deal with one type.
- An empty or unreadable ``system_prompt_file`` logs a warning and keeps the
  built-in prompt; it never aborts startup.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..base.logging import get_logger, log_event
from ..base.models import Effort
from . import CONFIG_FILE_ENV, load_config_file, _load_dotenv_once
from .defaults import (
    DEFAULT_EVENT_QUEUE_SIZE,
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_PROVIDER,
    DEFAULT_REASONING_EFFORT,
    DEFAULT_SYSTEM_PROMPT,
    SUPPORTED_PROVIDERS,
)
from .errors import ConfigError

# setting name -> environment variable
SETTINGS_ENV_MAP: Dict[str, str] = {
    "provider": "NAVI_PROVIDER",
    "model": "NAVI_MODEL",
    "reasoning_effort": "NAVI_REASONING_EFFORT",
    "system_prompt": "NAVI_SYSTEM_PROMPT",
    "system_prompt_file": "NAVI_SYSTEM_PROMPT_FILE",
    "queue_size": "NAVI_QUEUE_SIZE",
    "max_output_tokens": "NAVI_MAX_OUTPUT_TOKENS",
    "log_file": "NAVI_LOG_FILE",
    "log_level": "NAVI_LOG_LEVEL",
}


def _provider_name(value: Any) -> str:
    name = str(value or "").strip().lower()
    if name not in SUPPORTED_PROVIDERS:
        raise ValueError(f"unknown provider '{value}' (expected one of {', '.join(SUPPORTED_PROVIDERS)})")
    return name


class ModelEntry(BaseModel):
    """One entry of the top-level ``models`` catalog offered by ``/model``."""

    name: str = Field(min_length=1)
    provider: str
    description: Optional[str] = None

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> str:
        return _provider_name(value)


class AppSettings(BaseModel):
    """General settings for one run of the client.

    Attributes
    ----------
    provider:
        Provider adapter name, chosen once at startup.
    model:
        Model override; ``None`` uses the provider's configured model.
    reasoning_effort:
        Initial reasoning effort (cycled at runtime with ``/effort``).
    system_prompt:
        Text of the directive segment that opens every conversation.
    system_prompt_file:
        File holding the system prompt; used only when ``system_prompt`` is
        not set explicitly.
    models:
        Catalog of models the shell can switch between at runtime.
    queue_size:
        Capacity of the bounded event queue.
    max_output_tokens:
        Upper bound sent to providers that accept one.
    log_file / log_level:
        Optional rotating log file and level for the ``navi`` logger.
    """

    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None
    reasoning_effort: Effort = Effort(DEFAULT_REASONING_EFFORT)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    system_prompt_file: Optional[str] = None
    models: List[ModelEntry] = Field(default_factory=list)
    queue_size: int = Field(default=DEFAULT_EVENT_QUEUE_SIZE, gt=0)
    max_output_tokens: int = Field(default=DEFAULT_MAX_OUTPUT_TOKENS, gt=0)
    log_file: Optional[str] = None
    log_level: Optional[str] = None

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> str:
        return _provider_name(value)

    @field_validator("reasoning_effort", mode="before")
    @classmethod
    def _normalize_effort(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def models_for(self, provider: Optional[str] = None) -> List[ModelEntry]:
        """Catalog entries served by ``provider`` (default: the active one)."""
        name = provider or self.provider
        return [entry for entry in self.models if entry.provider == name]


def _env_settings() -> Dict[str, Any]:
    return {field: val for field, var in SETTINGS_ENV_MAP.items() if (val := os.getenv(var))}


def _read_system_prompt(path_value: str) -> Optional[str]:
    """Return the trimmed contents of ``path_value`` or ``None`` when unusable.

    Relative paths resolve against the directory of ``NAVI_CONFIG_FILE`` when
    one is set, otherwise against the working directory.
    """
    path = Path(path_value).expanduser()
    config_file = os.getenv(CONFIG_FILE_ENV, "")
    if not path.is_absolute() and config_file:
        path = Path(config_file).expanduser().parent / path
    logger = get_logger("navi.config")
    try:
        text = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        log_event(logger, "config.system_prompt_file_unreadable", level=logging.WARNING, path=str(path), error=str(exc))
        return None
    if not text:
        log_event(logger, "config.system_prompt_file_empty", level=logging.WARNING, path=str(path))
        return None
    return text


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> AppSettings:
    """Return validated settings.

    Merge order (later wins): defaults -> ``general`` section of the config
    file -> ``NAVI_*`` env vars -> ``overrides``. ``None`` overrides are
    ignored so unset CLI flags do not clobber configured values.

    ``models`` comes from the top-level ``models`` list of the config file.
    ``system_prompt_file`` is read only when no source set ``system_prompt``.

    Raises:
        ConfigError: On an unreadable config file or invalid values.
    """
    _load_dotenv_once()
    merged: Dict[str, Any] = {}
    config = load_config_file()
    general = config.get("general")
    if isinstance(general, dict):
        merged |= {k: v for k, v in general.items() if k in AppSettings.model_fields}
    catalog = config.get("models")
    if catalog is not None:
        merged["models"] = catalog
    merged |= _env_settings()
    if overrides:
        merged |= {k: v for k, v in overrides.items() if v is not None}
    if "system_prompt" not in merged and merged.get("system_prompt_file"):
        prompt = _read_system_prompt(str(merged["system_prompt_file"]))
        if prompt is not None:
            merged["system_prompt"] = prompt
    try:
        return AppSettings(**merged)
    except ValidationError as exc:
        raise ConfigError(f"invalid settings: {exc}") from exc


__all__ = ["AppSettings", "ModelEntry", "SETTINGS_ENV_MAP", "load_settings"]
