"""Query service that turns free text into flight filters and runs the AI search.

The extractor (a language model) is treated as an untrusted text producer.  Its
answer is decoded into a tagged result, the ``departure_time_range`` field is
normalised to canonical buckets, and when that leaves nothing usable the
rule-based fallback router re-derives the buckets from the user's own words.
Only a transport failure of the extractor aborts the query; every content problem
degrades to an unconstrained but valid filter object.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.deps import DEFAULT_LIMIT, FALLBACK_SERVICE_DATE, get_app_state, get_history
from app.schemas.common import ExtractionStatus, TimeRangeSource
from app.services.flight_service import fetch_flights
from app.utils.time_windows import in_vocabulary_order
from app.utils.tracing import traced_span
from core.generator.generate import (
    ExtractionResult,
    ExtractorTransportError,
    ParsedEmpty,
    ParsedOk,
    run_extraction,
)
from core.gsm.tnormalize import normalize_time_range
from core.router.temporal_router import match_fallback_rule

logger = logging.getLogger(__name__)

PASSTHROUGH_FIELDS = ("origin_data", "destination_data", "airline_data", "route_data", "sortBy")


class QueryParseError(RuntimeError):
    """Raised when the extractor could not be reached; no filters are produced."""


@dataclass
class FilterResolution:
    filters: Dict[str, Any]
    time_range_source: TimeRangeSource
    extraction_status: ExtractionStatus
    fallback_rule: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filters": self.filters,
            "time_range_source": self.time_range_source.value,
            "extraction_status": self.extraction_status.value,
            "fallback_rule": self.fallback_rule,
        }


def _raw_payload(extraction: ExtractionResult) -> tuple[Dict[str, Any], ExtractionStatus]:
    if isinstance(extraction, ParsedOk):
        return extraction.value, ExtractionStatus.ok
    if isinstance(extraction, ParsedEmpty):
        return {}, ExtractionStatus.empty
    return {}, ExtractionStatus.failed


def _service_date(value: Any, fallback: str) -> str:
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            logger.warning("Discarding malformed service_date %r", value)
    return fallback


def _limit(value: Any, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and value > 0:
        return value
    return fallback


def resolve_filters(
    query: str,
    extraction: ExtractionResult,
    fallback_service_date: str = FALLBACK_SERVICE_DATE,
    default_limit: int = DEFAULT_LIMIT,
) -> FilterResolution:
    """Merge the extractor's answer with the fallback router into a final filter object."""
    payload, status = _raw_payload(extraction)

    time_range: List[str] = normalize_time_range(payload.get("departure_time_range"))
    source = TimeRangeSource.extractor if time_range else TimeRangeSource.none
    rule_name = None
    if not time_range and isinstance(query, str) and query.strip():
        rule_name, time_range = match_fallback_rule(query)
        if time_range:
            source = TimeRangeSource.fallback

    filters: Dict[str, Any] = {
        "service_date": _service_date(payload.get("service_date"), fallback_service_date),
        "limit": _limit(payload.get("limit"), default_limit),
        "departure_time_range": in_vocabulary_order(time_range),
    }
    for key in PASSTHROUGH_FIELDS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            filters[key] = value.strip()

    logger.info(
        "Resolved filters (extraction=%s, time_range_source=%s, rule=%s): %s",
        status.value,
        source.value,
        rule_name,
        filters["departure_time_range"],
    )
    return FilterResolution(
        filters=filters,
        time_range_source=source,
        extraction_status=status,
        fallback_rule=rule_name,
    )


def parse_natural_language_query(query: str) -> FilterResolution:
    """Run the extractor for a query and resolve the final filter object."""
    state = get_app_state()
    defaults = state.defaults
    try:
        backend, backend_name = state.backend()
    except RuntimeError as exc:
        logger.error("No extractor backend available: %s", exc)
        raise QueryParseError("could not parse query") from exc

    with traced_span("query.parse", backend=backend_name):
        try:
            extraction = run_extraction(
                query,
                backend,
                state.llm_cfg,
                accepted_dates=defaults.get("accepted_dates", []),
            )
        except ExtractorTransportError as exc:
            raise QueryParseError("could not parse query") from exc

    return resolve_filters(
        query,
        extraction,
        fallback_service_date=defaults.get("fallback_service_date", FALLBACK_SERVICE_DATE),
        default_limit=defaults.get("default_limit", DEFAULT_LIMIT),
    )


def run_ai_query(query: str) -> Dict[str, Any]:
    """Parse a query, fetch matching flights, and log the query to history."""
    resolution = parse_natural_language_query(query)
    flights = fetch_flights(resolution.filters)
    try:
        get_history().append(query, resolution.filters, flights.get("count", 0))
    except OSError:
        logger.exception("Failed to save query history")
    return {**resolution.to_dict(), "flights": flights}


def list_history(limit: int = 10) -> List[Dict[str, Any]]:
    """Return the most recent queries, newest first."""
    return [record.to_dict() for record in get_history().recent(limit)]
