"""Resolve minute-of-day points and spans onto the canonical bucket table."""

from __future__ import annotations

from typing import List

from app.schemas.common import CanonicalBucket
from app.utils.time_windows import (
    VOCABULARY,
    check_minute,
    split_wraparound,
)


def _index_for_point(minute: int) -> int:
    check_minute(minute)
    for idx, entry in enumerate(VOCABULARY):
        if entry.contains(minute):
            return idx
    raise ValueError(f"no bucket covers minute {minute}")  # pragma: no cover


def bucket_for_point(minute: int) -> CanonicalBucket:
    """Return the single bucket whose interval contains the point."""
    return VOCABULARY[_index_for_point(minute)].bucket


def buckets_from_point(minute: int) -> List[CanonicalBucket]:
    """Return the containing bucket and every later one ("after X")."""
    idx = _index_for_point(minute)
    return [entry.bucket for entry in VOCABULARY[idx:]]


def buckets_before_point(minute: int) -> List[CanonicalBucket]:
    """Return every bucket strictly before the containing one ("before X")."""
    idx = _index_for_point(minute)
    return [entry.bucket for entry in VOCABULARY[:idx]]


def buckets_overlapping(start: int, end: int) -> List[CanonicalBucket]:
    """Return the buckets touched by "from start to end".

    The end bound is exclusive.  ``start > end`` means the span runs past midnight
    and is resolved as two spans whose results are unioned.
    """
    check_minute(start)
    check_minute(end)
    if start == end:
        return [bucket_for_point(start)]
    spans = split_wraparound(start, end)
    return [
        entry.bucket
        for entry in VOCABULARY
        if any(entry.intersects(span) for span in spans)
    ]
