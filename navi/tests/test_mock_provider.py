"""Mock provider: scripted replies, fixture catalog and echo fallback."""
from __future__ import annotations

import pytest

from navi.base.interfaces import HasDefaultModel, ProviderAdapter
from navi.base.models import Segment, UsageStats
from navi.base.streaming import AnswerFragment, End, ReasoningFragment
from navi.mock import MockProvider, ScriptedReply
from navi.mock.client import load_fixture_catalog


def _convo(text: str):
    return [Segment.directive("sys"), Segment.user(text)]


def test_mock_satisfies_adapter_protocols():
    provider = MockProvider()
    assert isinstance(provider, ProviderAdapter)
    assert isinstance(provider, HasDefaultModel)
    assert provider.provider_name == "mock"
    assert provider.default_model() == "mock-model"


def test_fixture_reply_is_matched_case_insensitively():
    events = list(MockProvider().open_stream(_convo("  Hello ")))
    catalog = load_fixture_catalog()["replies"]["hello"]
    assert [e.text for e in events if isinstance(e, ReasoningFragment)] == catalog["reasoning"]
    assert "".join(e.text for e in events if isinstance(e, AnswerFragment)) == "Hello! How can I help you today?"
    assert events[-1] == End(UsageStats(input_tokens=12, output_tokens=7, total_tokens=19))


def test_unknown_prompt_is_echoed():
    events = list(MockProvider().open_stream(_convo("ping the server")))
    answer = "".join(e.text for e in events if isinstance(e, AnswerFragment))
    assert answer == "You said: ping the server"
    assert isinstance(events[-1], End)


def test_script_is_consumed_in_order_and_last_entry_repeats():
    provider = MockProvider([ScriptedReply(answer=["one"]), ScriptedReply(answer=["two"], end=False)])
    first = list(provider.open_stream(_convo("a")))
    second = list(provider.open_stream(_convo("b")))
    third = list(provider.open_stream(_convo("c")))

    assert first == [AnswerFragment("one"), End(None)]
    assert second == third == [AnswerFragment("two")]
    assert [r[-1].answer_text for r in provider.requests] == ["a", "b", "c"]


def test_scripted_error_is_raised_after_fragments():
    provider = MockProvider([ScriptedReply(answer=["par"], extra=[{"odd": 1}], error=ConnectionError("down"))])
    stream = provider.open_stream(_convo("x"))
    assert next(stream) == AnswerFragment("par")
    assert next(stream) == {"odd": 1}
    with pytest.raises(ConnectionError):
        next(stream)


def test_custom_catalog_and_model():
    catalog = {"default_model": "cat-model", "replies": {"hi": {"answer": ["yo"]}}}
    provider = MockProvider(catalog=catalog)
    assert provider.default_model() == "cat-model"
    assert list(provider.open_stream(_convo("hi"))) == [AnswerFragment("yo"), End(None)]
    assert MockProvider(model="override", catalog=catalog).default_model() == "override"
