from __future__ import annotations

import pytest

from core.gsm.clock import parse_clock


@pytest.mark.parametrize(
    "text,expected",
    [
        ("noon", 720),
        ("Midnight", 0),
        ("13:00", 780),
        ("9:30", 570),
        ("00:05", 5),
        ("23:59", 1439),
        ("1pm", 780),
        ("1 PM", 780),
        ("12am", 0),
        ("12pm", 720),
        ("11:45am", 705),
        ("7 p.m.", 1140),
        ("6", 360),
    ],
)
def test_parse_clock_accepts_supported_forms(text, expected):
    assert parse_clock(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "lunch", "24:00", "13pm", "0am", "9:75", "25", "12:5", "noonish", None],
)
def test_parse_clock_rejects_everything_else(text):
    assert parse_clock(text) is None
