"""Tests for the configuration layer (provider config, env keys, settings).

All tests run under the autouse ``isolated_config`` fixture, so the process
environment and the config-file cache start clean.
"""
from __future__ import annotations

import json
import os

import pytest

from navi.base.models import Effort
from navi.config import CONFIG_FILE_ENV, get_model, get_provider_config, load_config_file
from navi.config.defaults import (
    DEFAULT_EVENT_QUEUE_SIZE,
    DEFAULT_SYSTEM_PROMPT,
    LMSTUDIO_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from navi.config.env import get_env_var_name, is_placeholder, resolve_provider_key
from navi.config.errors import ConfigError
from navi.config.settings import AppSettings, load_settings


def _write_config(tmp_path, monkeypatch, text: str, name: str = "navi.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    return path


def test_placeholder_detection():
    assert is_placeholder("sk-placeholder-123")
    assert is_placeholder("CHANGEME")
    assert is_placeholder("test_key")
    assert not is_placeholder("sk-or-v1-real")
    assert not is_placeholder(None)


def test_resolve_provider_key(monkeypatch):
    assert get_env_var_name("OpenRouter") == "OPENROUTER_API_KEY"
    assert resolve_provider_key("lmstudio") == (None, None)
    assert resolve_provider_key("openrouter") == (None, "OPENROUTER_API_KEY")
    monkeypatch.setenv("OPENROUTER_API_KEY", "your-example-key")
    assert resolve_provider_key("openrouter") == (None, "OPENROUTER_API_KEY")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-v1-abc")
    assert resolve_provider_key("openrouter") == ("sk-or-v1-abc", "OPENROUTER_API_KEY")


def test_provider_defaults_without_sources():
    cfg = get_provider_config("openrouter")
    assert cfg["model"] == OPENROUTER_DEFAULT_MODEL
    assert "api_key" not in cfg
    assert get_provider_config("lmstudio")["base_url"] == LMSTUDIO_DEFAULT_BASE_URL


def test_merge_order_file_env_overrides(tmp_path, monkeypatch):
    _write_config(
        tmp_path,
        monkeypatch,
        "openrouter:\n  model: from-file\n  base_url: https://file.invalid/v1\n",
    )
    assert get_model("openrouter") == "from-file"

    monkeypatch.setenv("OPENROUTER_MODEL", "from-env")
    cfg = get_provider_config("openrouter")
    assert cfg["model"] == "from-env"
    assert cfg["base_url"] == "https://file.invalid/v1"

    cfg = get_provider_config("openrouter", {"model": "from-override", "base_url": None})
    assert cfg["model"] == "from-override"
    assert cfg["base_url"] == "https://file.invalid/v1"


def test_lmstudio_base_url_alias(monkeypatch):
    monkeypatch.setenv("LM_STUDIO_BASE_URL", "http://gpu-box:1234/v1")
    assert get_provider_config("lmstudio")["base_url"] == "http://gpu-box:1234/v1"
    monkeypatch.setenv("LMSTUDIO_BASE_URL", "http://primary:1234/v1")
    assert get_provider_config("lmstudio")["base_url"] == "http://primary:1234/v1"


def test_placeholder_key_from_file_is_dropped(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, json.dumps({"openrouter": {"api_key": "placeholder"}}), "navi.json")
    assert "api_key" not in get_provider_config("openrouter")


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    from navi.config import reset_config_cache

    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nOPENROUTER_API_KEY='sk-or-from-dotenv'\n\nNOT A PAIR\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    reset_config_cache()
    try:
        assert get_provider_config("openrouter")["api_key"] == "sk-or-from-dotenv"
    finally:
        os.environ.pop("OPENROUTER_API_KEY", None)


def test_invalid_config_file_raises(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "openrouter: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config_file()


def test_non_mapping_config_file_raises(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config_file()


def test_settings_defaults():
    settings = load_settings()
    assert isinstance(settings, AppSettings)
    assert settings.provider == "openrouter"
    assert settings.reasoning_effort is Effort.AUTO
    assert settings.queue_size == DEFAULT_EVENT_QUEUE_SIZE


def test_settings_merge_order(tmp_path, monkeypatch):
    _write_config(
        tmp_path,
        monkeypatch,
        "general:\n  provider: lmstudio\n  reasoning_effort: low\n  queue_size: 32\n  unknown_key: 1\n",
    )
    settings = load_settings()
    assert settings.provider == "lmstudio"
    assert settings.reasoning_effort is Effort.LOW
    assert settings.queue_size == 32

    monkeypatch.setenv("NAVI_PROVIDER", "Mock")
    monkeypatch.setenv("NAVI_REASONING_EFFORT", "HIGH")
    settings = load_settings()
    assert settings.provider == "mock"
    assert settings.reasoning_effort is Effort.HIGH

    settings = load_settings({"reasoning_effort": "none", "provider": None})
    assert settings.provider == "mock"
    assert settings.reasoning_effort is Effort.NONE


@pytest.mark.parametrize(
    "overrides",
    [
        {"provider": "openai"},
        {"reasoning_effort": "extreme"},
        {"queue_size": 0},
        {"max_output_tokens": -1},
        {"models": [{"name": "x", "provider": "openai"}]},
        {"models": [{"name": "", "provider": "mock"}]},
    ],
)
def test_settings_validation_errors(overrides):
    with pytest.raises(ConfigError):
        load_settings(overrides)


def test_models_catalog_from_config_file(tmp_path, monkeypatch):
    _write_config(
        tmp_path,
        monkeypatch,
        "general:\n  provider: lmstudio\n"
        "models:\n"
        "  - name: qwen3-8b\n    provider: LMStudio\n    description: local\n"
        "  - name: anthropic/claude-sonnet-4\n    provider: openrouter\n",
    )
    settings = load_settings()
    assert [(m.name, m.provider, m.description) for m in settings.models] == [
        ("qwen3-8b", "lmstudio", "local"),
        ("anthropic/claude-sonnet-4", "openrouter", None),
    ]
    assert [m.name for m in settings.models_for()] == ["qwen3-8b"]
    assert [m.name for m in settings.models_for("openrouter")] == ["anthropic/claude-sonnet-4"]
    assert load_settings({"provider": "mock"}).models_for() == []


def test_system_prompt_file_relative_to_config_file(tmp_path, monkeypatch):
    (tmp_path / "prompt.md").write_text("\n  You answer in haiku.  \n", encoding="utf-8")
    _write_config(tmp_path, monkeypatch, "general:\n  system_prompt_file: prompt.md\n")
    assert load_settings().system_prompt == "You answer in haiku."


def test_inline_system_prompt_wins_over_file(tmp_path, monkeypatch):
    (tmp_path / "prompt.md").write_text("from file", encoding="utf-8")
    _write_config(tmp_path, monkeypatch, "general:\n  system_prompt_file: prompt.md\n")
    monkeypatch.setenv("NAVI_SYSTEM_PROMPT", "from env")
    assert load_settings().system_prompt == "from env"


@pytest.mark.parametrize("content", [None, "   \n"])
def test_unusable_system_prompt_file_keeps_default(tmp_path, monkeypatch, content):
    prompt = tmp_path / "prompt.md"
    if content is not None:
        prompt.write_text(content, encoding="utf-8")
    monkeypatch.setenv("NAVI_SYSTEM_PROMPT_FILE", str(prompt))
    settings = load_settings()
    assert settings.system_prompt == DEFAULT_SYSTEM_PROMPT
    assert settings.system_prompt_file == str(prompt)
