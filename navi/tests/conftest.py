"""Pytest configuration for the navi test suite.

Every test runs with a clean configuration: ``NAVI_*`` and provider
environment variables are removed, ``.env`` loading points at a missing
file, and the config-file cache is reset before and after the test.
"""

from __future__ import annotations

import os
import time
from typing import Callable, Iterator

import pytest

from navi.config import reset_config_cache

_ENV_PREFIXES = ("NAVI_", "OPENROUTER_", "LMSTUDIO_", "LM_STUDIO_", "MOCK_")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip config-related env vars and reset cached config for the test."""
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def wait_until() -> Callable[..., bool]:
    """Poll ``predicate`` until it returns True or ``timeout`` elapses."""

    def _wait(predicate: Callable[[], bool], timeout: float = 5.0, interval: float = 0.01) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(interval)
        return predicate()

    return _wait
