"""navi.config.defaults
====================

Central place for small, stable default values used across the ``navi``
package. Every value here can be overridden by the external config file,
environment variables or CLI flags; these are the fallbacks.

Only plain constants live here so any layer can import them without pulling
in providers or the runtime.
"""

from __future__ import annotations

# ---- General ----
# Provider selected when neither config file, env nor CLI names one.
DEFAULT_PROVIDER = "openrouter"
SUPPORTED_PROVIDERS = ("openrouter", "lmstudio", "mock")

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant. Be direct, be honest about uncertainty, "
    "and prefer clarity over hedging."
)
DEFAULT_REASONING_EFFORT = "auto"
DEFAULT_MAX_OUTPUT_TOKENS = 16384

# ---- Session engine ----
# Bounded event queue between network tasks and the owner loop.
DEFAULT_EVENT_QUEUE_SIZE = 256

# ---- Viewport ----
DEFAULT_VIEWPORT_HEIGHT = 24
DEFAULT_CONTENT_WIDTH = 80

# ---- Provider-specific defaults ----
OPENROUTER_DEFAULT_MODEL = "anthropic/claude-sonnet-4"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

# LM Studio serves whichever model is loaded; the name is still sent.
LMSTUDIO_DEFAULT_MODEL = "local-model"
LMSTUDIO_DEFAULT_BASE_URL = "http://localhost:1234/v1"
LMSTUDIO_BASE_URL_ENV = "LM_STUDIO_BASE_URL"

MOCK_DEFAULT_MODEL = "mock-model"

__all__ = [
    "DEFAULT_PROVIDER",
    "SUPPORTED_PROVIDERS",
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_REASONING_EFFORT",
    "DEFAULT_MAX_OUTPUT_TOKENS",
    "DEFAULT_EVENT_QUEUE_SIZE",
    "DEFAULT_VIEWPORT_HEIGHT",
    "DEFAULT_CONTENT_WIDTH",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "LMSTUDIO_DEFAULT_MODEL",
    "LMSTUDIO_DEFAULT_BASE_URL",
    "LMSTUDIO_BASE_URL_ENV",
    "MOCK_DEFAULT_MODEL",
]
