"""Minute-of-day utilities backing the departure-time buckets.

Flight queries never talk about calendar ranges here, only about where in the day a
departure falls.  Every point is expressed as minutes since midnight (0-1439) and
the four canonical buckets are laid out as inclusive segments over that range.  The
``night`` bucket wraps around midnight, so it is stored as two segments; callers
always go through ``BucketInterval`` rather than comparing raw bounds themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from app.schemas.common import CanonicalBucket

MINUTES_PER_DAY = 1440
LAST_MINUTE = MINUTES_PER_DAY - 1


def check_minute(value: int) -> int:
    if not 0 <= value <= LAST_MINUTE:
        raise ValueError(f"minute-of-day out of range: {value}")
    return value


def format_minute(value: int) -> str:
    """Render a minute-of-day as HH:MM."""
    hours, minutes = divmod(value, 60)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class MinuteSpan:
    """Half-open span [start, end) of minutes within a single day."""

    start: int
    end: int

    def is_empty(self) -> bool:
        return self.end <= self.start


def make_span(start: int, end: int) -> MinuteSpan:
    """Build a span clamped to the day; inverted bounds collapse to an empty span."""
    start = max(0, min(start, MINUTES_PER_DAY))
    end = max(0, min(end, MINUTES_PER_DAY))
    if end < start:
        end = start
    return MinuteSpan(start=start, end=end)


def split_wraparound(start: int, end: int) -> List[MinuteSpan]:
    """Return the spans covering "from start to end", crossing midnight when start > end."""
    if start <= end:
        return [make_span(start, end)]
    return [make_span(start, MINUTES_PER_DAY), make_span(0, end)]


@dataclass(frozen=True)
class BucketInterval:
    """A canonical bucket and the inclusive minute segments it owns."""

    bucket: CanonicalBucket
    segments: Tuple[Tuple[int, int], ...]

    def contains(self, minute: int) -> bool:
        """Return True when the minute falls inside any of the bucket's segments."""
        return any(low <= minute <= high for low, high in self.segments)

    def intersects(self, span: MinuteSpan) -> bool:
        """Return True when any segment overlaps the half-open span."""
        if span.is_empty():
            return False
        return any(low < span.end and span.start <= high for low, high in self.segments)

    def to_payload(self) -> Dict[str, object]:
        return {
            "bucket": self.bucket.value,
            "segments": [
                {"from": format_minute(low), "to": format_minute(high)} for low, high in self.segments
            ],
        }


# Order matters: "after X" walks forward through this table and "before X" walks back.
VOCABULARY: Tuple[BucketInterval, ...] = (
    BucketInterval(CanonicalBucket.morning, ((300, 719),)),
    BucketInterval(CanonicalBucket.afternoon, ((720, 1079),)),
    BucketInterval(CanonicalBucket.evening, ((1080, 1379),)),
    BucketInterval(CanonicalBucket.night, ((1380, LAST_MINUTE), (0, 299))),
)

BUCKET_ORDER: Tuple[CanonicalBucket, ...] = tuple(entry.bucket for entry in VOCABULARY)
CANONICAL_TAGS: Tuple[str, ...] = tuple(bucket.value for bucket in BUCKET_ORDER)


def interval_for(bucket: CanonicalBucket) -> BucketInterval:
    for entry in VOCABULARY:
        if entry.bucket == bucket:
            return entry
    raise KeyError(bucket)


def in_vocabulary_order(tags) -> List[str]:
    """Filter arbitrary tags down to canonical ones, deduplicated and in table order."""
    wanted = {str(getattr(tag, "value", tag)) for tag in tags}
    return [tag for tag in CANONICAL_TAGS if tag in wanted]
