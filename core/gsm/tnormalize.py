"""Normalise extractor-supplied departure time hints into canonical buckets."""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Tuple

from app.schemas.common import CanonicalBucket
from app.utils.time_windows import in_vocabulary_order

SPLIT_PATTERN = re.compile(r"[,;|/]")
WHITESPACE = re.compile(r"\s+")

NO_PREFERENCE = frozenset({"any", "all", "all day", "any time", "anytime", "no preference"})

# Checked in order; the first group with a fragment inside the element wins.
SYNONYM_GROUPS: Tuple[Tuple[CanonicalBucket, Tuple[str, ...]], ...] = (
    (CanonicalBucket.morning, ("morning",)),
    (CanonicalBucket.afternoon, ("afternoon", "after noon", "after lunch")),
    (CanonicalBucket.evening, ("evening",)),
    (CanonicalBucket.night, ("late night", "overnight", "night")),
)


def _clean(text: str) -> str:
    return WHITESPACE.sub(" ", text.strip().lower())


def match_synonym(text: str) -> CanonicalBucket | None:
    """Map a single phrase to its canonical bucket, or None when unrecognised."""
    phrase = _clean(text)
    if not phrase or phrase in NO_PREFERENCE:
        return None
    for bucket, fragments in SYNONYM_GROUPS:
        if any(fragment in phrase for fragment in fragments):
            return bucket
    return None


def _elements(value: Any) -> Iterable[str]:
    if isinstance(value, str):
        return SPLIT_PATTERN.split(value)
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []


def normalize_time_range(value: Any) -> List[str]:
    """Convert a raw ``departure_time_range`` value into a de-duplicated tag list.

    Accepts None, a single phrase, a delimited string or a list of phrases; anything
    else is treated as "no preference".  Unrecognised phrases are dropped.
    """
    matched = []
    for element in _elements(value):
        bucket = match_synonym(element)
        if bucket is not None:
            matched.append(bucket)
    return in_vocabulary_order(matched)
