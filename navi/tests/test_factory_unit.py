"""Provider factory: name resolution, kwargs handling and error wrapping."""
from __future__ import annotations

import pytest

from navi import create
from navi.base.factory import ProviderFactory, UnknownProviderError, create_provider
from navi.base.models import Effort
from navi.lmstudio import LMStudioProvider
from navi.mock import MockProvider
from navi.openrouter import OpenRouterProvider


def test_supported_names_are_stable():
    assert ProviderFactory.supported() == ("openrouter", "lmstudio", "mock")


def test_create_each_provider():
    assert isinstance(ProviderFactory.create("OpenRouter", api_key="sk-or-v1-x"), OpenRouterProvider)
    assert isinstance(create_provider("lmstudio", model="qwen"), LMStudioProvider)
    assert isinstance(create("mock"), MockProvider)


def test_none_kwargs_fall_back_to_defaults():
    provider = ProviderFactory.create("lmstudio", model=None, effort=Effort.HIGH)
    assert provider.default_model() == "local-model"
    assert provider.effort is Effort.HIGH


def test_unknown_provider():
    with pytest.raises(UnknownProviderError) as info:
        ProviderFactory.create("openai")
    assert "supported: openrouter, lmstudio, mock" in str(info.value)


def test_invalid_constructor_arguments_are_wrapped():
    with pytest.raises(UnknownProviderError):
        ProviderFactory.create("mock", max_output_tokens=10)
