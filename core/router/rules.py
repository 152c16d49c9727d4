"""Phrase tables consumed by the fallback time-range router."""

from __future__ import annotations

from typing import Dict, Tuple

from app.schemas.common import CanonicalBucket
from core.gsm.clock import CLOCK_TOKEN

ROUTE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "after_lunch": (r"\bafter\s+lunch", r"\bafter\s+noon\b"),
    "late_night": (r"\blate[\s-]night", r"\bovernight\b"),
    "no_preference": (
        r"\bany\s*time\b",
        r"\ball\s+day\b",
        r"\bno\s+preference\b",
        r"\bany\b",
    ),
}

# Single-bucket phrases; "night" is deliberately absent, it is handled by the
# late-night rule and the loose scan.
SINGLE_BUCKET_KEYWORDS: Tuple[Tuple[CanonicalBucket, str], ...] = (
    (CanonicalBucket.morning, r"\bmornings?\b"),
    (CanonicalBucket.afternoon, r"\bafternoons?\b"),
    (CanonicalBucket.evening, r"\bevenings?\b"),
)

# Plain substring scan, last resort.
LOOSE_KEYWORDS: Tuple[Tuple[CanonicalBucket, Tuple[str, ...]], ...] = (
    (CanonicalBucket.morning, ("morning",)),
    (CanonicalBucket.afternoon, ("afternoon",)),
    (CanonicalBucket.evening, ("evening",)),
    (CanonicalBucket.night, ("late night", "overnight", "night")),
)

AFTER_PATTERN = rf"\bafter\s+(?P<point>{CLOCK_TOKEN})(?![\w:])"
BEFORE_PATTERN = rf"\bbefore\s+(?P<point>{CLOCK_TOKEN})(?![\w:])"
BETWEEN_PATTERNS: Tuple[str, ...] = (
    rf"\bbetween\s+(?P<start>{CLOCK_TOKEN})\s*(?:and|-|to)\s*(?P<end>{CLOCK_TOKEN})(?![\w:])",
    rf"\bfrom\s+(?P<start>{CLOCK_TOKEN})\s*(?:to|until|till|-)\s*(?P<end>{CLOCK_TOKEN})(?![\w:])",
)
