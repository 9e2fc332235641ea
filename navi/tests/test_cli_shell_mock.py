"""Terminal client tests against the mock provider (no network)."""
from __future__ import annotations

import io
import logging
from typing import Iterator, List

import pytest

from navi.base.logging import get_logger
from navi.base.streaming import AnswerChunk, ReasoningChunk
from navi.core.state import AppState
from navi.service.cli import main
from navi.service.cli.cli_parser import build_parser
from navi.config.settings import ModelEntry
from navi.mock import MockProvider
from navi.service import ChatRuntime
from navi.service.cli.cli_shell import ChatShell, StreamPrinter
from navi.service.cli.cli_utils import parse_verbosity, suppress_console_logs


def _feed_input(monkeypatch: pytest.MonkeyPatch, lines: List[str]) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_one_shot_prompt_prints_reply(capsys):
    code = main(["--provider", "mock", "--prompt", "hello", "--no-color"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Hello! How can I help you today?" in out
    assert "The user greets me." in out
    assert "12 in | 7 out" in out


def test_interactive_commands(monkeypatch, capsys):
    _feed_input(monkeypatch, ["hello", "/effort", "/status", "/bogus", "", "/new", "/quit", "never read"])
    assert main(["--provider", "mock"]) == 0
    out = capsys.readouterr().out
    assert "Welcome to Navi!" in out
    assert "How can I help you today?" in out
    assert "Reasoning effort: Low" in out
    assert "provider : mock" in out
    assert "unknown command '/bogus'" in out
    assert "New conversation." in out


def test_eof_exits_cleanly(monkeypatch, capsys):
    _feed_input(monkeypatch, [])
    assert main(["--provider", "mock", "--effort", "none"]) == 0


def test_invalid_log_level_is_rejected(capsys):
    assert main(["--provider", "mock", "--log-level", "chatty", "--prompt", "x"]) == 2
    assert "invalid log level" in capsys.readouterr().err


def test_bad_config_file_is_reported(tmp_path, monkeypatch, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("general: [oops\n", encoding="utf-8")
    monkeypatch.setenv("NAVI_CONFIG_FILE", str(cfg))
    assert main(["--prompt", "x"]) == 2
    assert "error:" in capsys.readouterr().err


def test_parser_rejects_unknown_provider():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--provider", "openai"])


def test_stream_printer_separates_channels():
    out = io.StringIO()
    printer = StreamPrinter(out, colors=False)
    state = AppState()
    for event in (ReasoningChunk(1, "think"), AnswerChunk(1, "Hi"), AnswerChunk(1, "!")):
        printer(state, event)
    printer.end_reply()
    assert out.getvalue() == "think\nHi!\n"


def test_parse_verbosity():
    assert parse_verbosity("verbose") == "DEBUG"
    assert parse_verbosity("Warning") == "WARNING"
    assert parse_verbosity("silent") == "CRITICAL"
    assert parse_verbosity("chatty") is None


def test_suppress_console_logs_restores_handlers():
    base = get_logger("navi")
    before = list(base.handlers)
    with suppress_console_logs():
        assert not [h for h in base.handlers if isinstance(h, logging.StreamHandler)]
    assert base.handlers == before


def test_model_command_switches_the_next_request():
    adapter = MockProvider()
    out = io.StringIO()
    models = [
        ModelEntry(name="mock-model", provider="mock"),
        ModelEntry(name="mock-large", provider="mock", description="slower, smarter"),
        ModelEntry(name="vendor/cloud", provider="openrouter"),
    ]
    shell = ChatShell(ChatRuntime(adapter), out=out, models=models)
    try:
        shell.handle_line("/model")
        listing = out.getvalue()
        assert "* 1. mock-model [mock]" in listing
        assert "  2. mock-large [mock]  slower, smarter" in listing
        assert "vendor/cloud" not in listing

        shell.handle_line("/model vendor/cloud")
        shell.handle_line("/model 7")
        assert shell.runtime.state.model_name == "mock-model"
        assert "configured for openrouter, not mock" in out.getvalue()
        assert "no model number 7" in out.getvalue()

        shell.handle_line("/model 2")
        assert shell.runtime.state.model_name == "mock-large"
        assert "Model: mock-large" in out.getvalue()
        assert shell.ask("hello")
        assert adapter.request_options[-1][1] == "mock-large"
        assert adapter.default_model() == "mock-model"
    finally:
        shell.runtime.shutdown()


def test_model_catalog_reaches_the_shell_from_config(tmp_path, monkeypatch, capsys):
    cfg = tmp_path / "navi.yaml"
    cfg.write_text(
        "general:\n  provider: mock\nmodels:\n  - name: mock-model\n    provider: mock\n    description: canned\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("NAVI_CONFIG_FILE", str(cfg))
    _feed_input(monkeypatch, ["/model", "/model unlisted-model", "/status", "/quit"])
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "* 1. mock-model [mock]  canned" in out
    assert "model    : unlisted-model" in out


def test_model_command_without_catalog_explains_how_to_add_one(monkeypatch, capsys):
    _feed_input(monkeypatch, ["/model", "/quit"])
    assert main(["--provider", "mock"]) == 0
    assert "No models configured for mock" in capsys.readouterr().out
