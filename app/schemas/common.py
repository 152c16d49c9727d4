from __future__ import annotations

from enum import Enum


class CanonicalBucket(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"
    night = "night"


class TimeRangeSource(str, Enum):
    extractor = "extractor"
    fallback = "fallback"
    none = "none"


class ExtractionStatus(str, Enum):
    ok = "ok"
    empty = "empty"
    failed = "failed"
