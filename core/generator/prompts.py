"""Prompt builders for the natural-language flight query extractor.

The extractor receives the raw user sentence plus the dates the flight data set
actually covers; this module turns that into a stable system/user message pair.
The wording is kept deterministic so prompts can be diffed across runs.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Sequence

BASE_SYSTEM_PROMPT = (
    "You parse natural language flight queries into structured search filters. "
    "Return ONLY a valid JSON object, no explanation."
)

FIELD_NOTES = (
    "- service_date (YYYY-MM-DD format, use one of the available dates above)",
    "- origin_data (3-letter airport code)",
    "- destination_data (3-letter airport code)",
    "- airline_data (2-letter airline code)",
    "- route_data (format: XXX-YYY)",
    "- sortBy (\"departure_time\", \"arrival_time\" or \"airline\")",
    "- limit (positive integer, only when the user asks for a number of results)",
    "- departure_time_range (array drawn from \"morning\", \"afternoon\", \"evening\", \"night\")",
)

TIME_NOTES = (
    "- \"morning\" = flights between 05:00-11:59",
    "- \"afternoon\" = flights between 12:00-17:59",
    "- \"evening\" = flights between 18:00-22:59",
    "- \"night\" = flights between 23:00-04:59",
    "- \"after lunch\" = afternoon, evening and night",
)

COUNTRY_NOTES = (
    "- Australia: SYD, MEL, BNE, PER",
    "- Philippines: MNL, CEB",
    "- USA: LAX, JFK, ORD",
    "- UK: LHR, LGW",
)


def build_user_prompt(query: str, accepted_dates: Sequence[str], today: dt.date) -> str:
    """Format the extraction request for a single query."""
    lines = [
        "Parse the following natural language flight query into structured filters. "
        f"Today's date is {today.isoformat()}.",
        "",
        f"Available data dates: {', '.join(accepted_dates) if accepted_dates else 'any'}",
        "",
        f'Query: "{query}"',
        "",
        "Extract and return ONLY a valid JSON object with these optional fields:",
        *FIELD_NOTES,
        "",
        "Time interpretations:",
        *TIME_NOTES,
        "",
        "Country to airport mappings (examples):",
        *COUNTRY_NOTES,
        "",
        "Return ONLY the JSON object, no explanation:",
    ]
    return "\n".join(lines)


def build_extraction_messages(
    query: str,
    accepted_dates: Sequence[str],
    today: dt.date | None = None,
) -> List[dict]:
    """Return the system/user message pair consumed by the LLM backends."""
    today = today or dt.datetime.now(dt.timezone.utc).date()
    return [
        {"role": "system", "content": BASE_SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(query, accepted_dates, today)},
    ]
