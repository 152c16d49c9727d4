from __future__ import annotations

import pytest

from core.router.temporal_router import FALLBACK_RULES, match_fallback_rule, parse_query_fallback


def test_after_lunch():
    assert parse_query_fallback("All flights leaving Australia after lunch time") == [
        "afternoon",
        "evening",
        "night",
    ]
    assert parse_query_fallback("anything after noon to MNL") == ["afternoon", "evening", "night"]


def test_late_night():
    assert parse_query_fallback("late night flights to Manila") == ["night"]
    assert parse_query_fallback("Late-night departures") == ["night"]
    assert parse_query_fallback("overnight to LHR") == ["night"]


def test_no_preference():
    assert parse_query_fallback("any flights tomorrow") == []
    rule, tags = match_fallback_rule("flights to SYD, no preference on time")
    assert rule == "no_preference"
    assert tags == []


def test_single_bucket_phrase():
    assert parse_query_fallback("Morning flights from SYD") == ["morning"]
    assert parse_query_fallback("afternoons to CEB") == ["afternoon"]


def test_several_bucket_names_are_collected():
    rule, tags = match_fallback_rule("morning or evening flights to MEL")
    assert rule == "loose_scan"
    assert tags == ["morning", "evening"]


@pytest.mark.parametrize(
    "query,expected",
    [
        ("flights after 1pm", ["afternoon", "evening", "night"]),
        ("after 20:30 from PER", ["evening", "night"]),
        ("after 2am", ["night"]),
        ("before 3pm", ["morning"]),
        ("before 9am please", []),
        ("before midnight", ["morning", "afternoon", "evening"]),
        ("between 15:00 and 23:00", ["afternoon", "evening"]),
        ("between 9am-1pm", ["morning", "afternoon"]),
        ("from 22:00 to 2:00", ["evening", "night"]),
    ],
)
def test_clock_rules(query, expected):
    assert parse_query_fallback(query) == expected


def test_malformed_clock_falls_through():
    rule, tags = match_fallback_rule("after 25:00 tonight")
    assert rule == "loose_scan"
    assert tags == ["night"]
    assert parse_query_fallback("between 9am and 99pm") == []


def test_nothing_matched_is_unconstrained():
    assert match_fallback_rule("SYD to MNL on the 9th") == (None, [])
    assert parse_query_fallback("") == []
    assert parse_query_fallback("   ") == []
    assert parse_query_fallback(None) == []


def test_rule_table_order():
    names = [rule.name for rule in FALLBACK_RULES]
    assert names.index("after_lunch") < names.index("after_clock")
    assert names[-1] == "loose_scan"
