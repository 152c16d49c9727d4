from __future__ import annotations

import pytest

from core.gsm.tnormalize import match_synonym, normalize_time_range

CANONICAL = {"morning", "afternoon", "evening", "night"}


@pytest.mark.parametrize(
    "raw",
    [
        None,
        [],
        "",
        42,
        {"range": "morning"},
        ["brunch", None, 7, "MORNING"],
        "Late Night | after lunch ; whenever",
        ["evening", "evening", "Evening "],
    ],
)
def test_output_is_canonical_and_unique(raw):
    result = normalize_time_range(raw)
    assert set(result) <= CANONICAL
    assert len(result) == len(set(result))


def test_empty_inputs_mean_no_preference():
    assert normalize_time_range(None) == []
    assert normalize_time_range([]) == []


def test_case_and_whitespace_insensitive():
    assert normalize_time_range(["MORNING", " morning "]) == ["morning"]
    assert normalize_time_range(["  early   MORNING  "]) == ["morning"]


def test_delimited_string_is_split():
    assert normalize_time_range("morning, evening") == ["morning", "evening"]
    assert normalize_time_range("afternoon/night") == ["afternoon", "night"]
    assert normalize_time_range("Evening|Morning") == ["morning", "evening"]


def test_synonyms_map_to_buckets():
    assert match_synonym("after lunch") == "afternoon"
    assert match_synonym("After  Noon") == "afternoon"
    assert match_synonym("overnight") == "night"
    assert match_synonym("late night") == "night"


def test_no_preference_and_unknown_phrases_are_dropped():
    assert normalize_time_range(["any", "all day", "No Preference", "brunch"]) == []
    assert normalize_time_range("all") == []


def test_normalizing_canonical_output_is_idempotent():
    once = normalize_time_range(["Night", "morning", "after lunch"])
    assert normalize_time_range(once) == once
