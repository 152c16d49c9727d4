"""Rule-based fallback that derives departure buckets straight from the query text.

Used when the extractor's structured answer does not yield a usable time range.
Rules are evaluated in table order and the first one returning a bucket list wins;
a handler returns None to let the next rule try.  Malformed clock phrases simply
fall through, so the router never raises on user input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from app.schemas.common import CanonicalBucket
from app.utils.time_windows import in_vocabulary_order
from core.gsm.clock import parse_clock
from core.gsm.intervals import (
    buckets_before_point,
    buckets_from_point,
    buckets_overlapping,
)
from core.router.rules import (
    AFTER_PATTERN,
    BEFORE_PATTERN,
    BETWEEN_PATTERNS,
    LOOSE_KEYWORDS,
    ROUTE_KEYWORDS,
    SINGLE_BUCKET_KEYWORDS,
)

Handler = Callable[[str], Optional[List[CanonicalBucket]]]


def _compile(patterns: Sequence[str]) -> Tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern) for pattern in patterns)


AFTER_LUNCH = _compile(ROUTE_KEYWORDS["after_lunch"])
LATE_NIGHT = _compile(ROUTE_KEYWORDS["late_night"])
NO_PREFERENCE = _compile(ROUTE_KEYWORDS["no_preference"])
SINGLE_BUCKETS = tuple((bucket, re.compile(pattern)) for bucket, pattern in SINGLE_BUCKET_KEYWORDS)
AFTER_CLOCK = re.compile(AFTER_PATTERN)
BEFORE_CLOCK = re.compile(BEFORE_PATTERN)
BETWEEN_CLOCKS = _compile(BETWEEN_PATTERNS)


def _any_match(patterns: Sequence[re.Pattern[str]], text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


def _after_lunch(text: str) -> Optional[List[CanonicalBucket]]:
    if _any_match(AFTER_LUNCH, text):
        return [CanonicalBucket.afternoon, CanonicalBucket.evening, CanonicalBucket.night]
    return None


def _late_night(text: str) -> Optional[List[CanonicalBucket]]:
    if _any_match(LATE_NIGHT, text):
        return [CanonicalBucket.night]
    return None


def _single_bucket(text: str) -> Optional[List[CanonicalBucket]]:
    named = [bucket for bucket, pattern in SINGLE_BUCKETS if pattern.search(text)]
    if len(named) == 1:
        return named
    return None


def _no_preference(text: str) -> Optional[List[CanonicalBucket]]:
    if _any_match(NO_PREFERENCE, text):
        return []
    return None


def _after_clock(text: str) -> Optional[List[CanonicalBucket]]:
    for match in AFTER_CLOCK.finditer(text):
        point = parse_clock(match.group("point"))
        if point is not None:
            return buckets_from_point(point)
    return None


def _before_clock(text: str) -> Optional[List[CanonicalBucket]]:
    for match in BEFORE_CLOCK.finditer(text):
        point = parse_clock(match.group("point"))
        if point is not None:
            return buckets_before_point(point)
    return None


def _between_clocks(text: str) -> Optional[List[CanonicalBucket]]:
    for pattern in BETWEEN_CLOCKS:
        for match in pattern.finditer(text):
            start = parse_clock(match.group("start"))
            end = parse_clock(match.group("end"))
            if start is not None and end is not None:
                return buckets_overlapping(start, end)
    return None


def _loose_scan(text: str) -> Optional[List[CanonicalBucket]]:
    found = [
        bucket
        for bucket, fragments in LOOSE_KEYWORDS
        if any(fragment in text for fragment in fragments)
    ]
    return found or None


@dataclass(frozen=True)
class FallbackRule:
    name: str
    handler: Handler


FALLBACK_RULES: Tuple[FallbackRule, ...] = (
    FallbackRule("after_lunch", _after_lunch),
    FallbackRule("late_night", _late_night),
    FallbackRule("single_bucket", _single_bucket),
    FallbackRule("no_preference", _no_preference),
    FallbackRule("after_clock", _after_clock),
    FallbackRule("before_clock", _before_clock),
    FallbackRule("between_clocks", _between_clocks),
    FallbackRule("loose_scan", _loose_scan),
)


def match_fallback_rule(
    query: str,
    rules: Sequence[FallbackRule] = FALLBACK_RULES,
) -> Tuple[Optional[str], List[str]]:
    """Return the name of the first rule that fired (or None) and its tags."""
    if not isinstance(query, str):
        return None, []
    text = " ".join(query.lower().split())
    if not text:
        return None, []
    for rule in rules:
        result = rule.handler(text)
        if result is not None:
            return rule.name, in_vocabulary_order(result)
    return None, []


def parse_query_fallback(query: str) -> List[str]:
    """Derive canonical departure buckets from free text; empty means unconstrained."""
    _, tags = match_fallback_rule(query)
    return tags
