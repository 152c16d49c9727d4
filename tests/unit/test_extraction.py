from __future__ import annotations

import datetime as dt

import httpx
import pytest

from core.generator.generate import (
    ExtractorTransportError,
    ParsedEmpty,
    ParsedOk,
    ParseFailed,
    extract_json_payload,
    run_extraction,
)
from core.generator.prompts import build_extraction_messages


class StaticBackend:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def generate(self, messages, max_tokens, temperature, stop=None):
        self.calls.append(messages)
        return self.text


class BrokenBackend:
    def generate(self, messages, max_tokens, temperature, stop=None):
        raise httpx.ConnectError("connection refused")


def test_extracts_json_wrapped_in_prose():
    text = 'Sure! ```json\n{"origin_data": "SYD", "route_data": {"a": 1}}\n``` Hope that helps.'
    result = extract_json_payload(text)
    assert isinstance(result, ParsedOk)
    assert result.value == {"origin_data": "SYD", "route_data": {"a": 1}}


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_blank_completion_is_empty(text):
    assert isinstance(extract_json_payload(text), ParsedEmpty)


@pytest.mark.parametrize(
    "text",
    [
        "I could not understand the query.",
        "{origin_data: SYD}",
        '["morning"]',
    ],
)
def test_unusable_completion_is_failed(text):
    assert isinstance(extract_json_payload(text), ParseFailed)


def test_run_extraction_builds_prompt_with_dates():
    backend = StaticBackend('{"departure_time_range": ["Morning"]}')
    result = run_extraction(
        "morning flights to MNL",
        backend,
        {"max_tokens": 128},
        accepted_dates=["2025-10-02", "2025-10-09"],
        today=dt.date(2025, 10, 1),
    )
    assert result == ParsedOk({"departure_time_range": ["Morning"]})
    user_prompt = backend.calls[0][-1]["content"]
    assert "2025-10-02, 2025-10-09" in user_prompt
    assert "Today's date is 2025-10-01" in user_prompt
    assert 'Query: "morning flights to MNL"' in user_prompt


def test_run_extraction_wraps_transport_errors():
    with pytest.raises(ExtractorTransportError):
        run_extraction("flights after lunch", BrokenBackend(), {})


def test_messages_are_system_then_user():
    messages = build_extraction_messages("x", [], today=dt.date(2025, 10, 9))
    assert [message["role"] for message in messages] == ["system", "user"]
    assert "Available data dates: any" in messages[1]["content"]
