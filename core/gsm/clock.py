"""Parse short clock expressions ("1pm", "13:00", "noon") into minutes since midnight."""

from __future__ import annotations

import re
from typing import Optional

NAMED_TIMES = {"noon": 720, "midday": 720, "midnight": 0}

CLOCK_PATTERN = re.compile(
    r"^(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<suffix>a\.?m\.?|p\.?m\.?)?$"
)

# Pattern fragment used by the fallback rules to locate a clock expression in a sentence.
CLOCK_TOKEN = r"(?:noon|midday|midnight|\d{1,2}(?::\d{2})?\s*(?:a\.?m\.?|p\.?m\.?)?)"


def parse_clock(text: str) -> Optional[int]:
    """Return the minute-of-day for a clock expression, or None when it is not one.

    Forms: ``noon``, ``midnight``, 24-hour ``H:MM``/``HH:MM``, and 12-hour ``H`` or
    ``H:MM`` with an am/pm suffix.  A bare hour without suffix is read on the 24-hour
    clock.  Out-of-range hours or minutes are rejected rather than wrapped.
    """
    if not isinstance(text, str):
        return None
    value = text.strip().lower()
    if value in NAMED_TIMES:
        return NAMED_TIMES[value]

    match = CLOCK_PATTERN.match(value)
    if not match:
        return None
    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    if minute > 59:
        return None

    suffix = match.group("suffix")
    if suffix:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12
        if suffix.startswith("p"):
            hour += 12
    elif hour > 23:
        return None
    return hour * 60 + minute
