"""Client for the flight-data webhook, with response caching keyed by filters."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from app.deps import get_cache, get_search_cfg
from app.schemas.flights import FlightResponse
from storage.cache.keys import make_cache_key

logger = logging.getLogger(__name__)


class FlightServiceError(RuntimeError):
    """The flight-search backend failed or answered with something unusable."""


def _normalize_response(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise FlightServiceError("flight API returned a non-object payload")
    items = data.get("items") or []
    if not isinstance(items, list):
        raise FlightServiceError("flight API returned malformed items")
    count = data.get("count")
    try:
        response = FlightResponse.model_validate(
            {
                "ok": bool(data.get("ok", True)),
                "count": count if isinstance(count, int) else len(items),
                "nextPageToken": data.get("nextPageToken"),
                "items": items,
            }
        )
    except ValidationError as exc:
        logger.warning("Flight API payload failed validation: %s", exc)
        raise FlightServiceError("flight API returned malformed items") from exc
    return response.model_dump(mode="json")


def fetch_flights(filters: Dict[str, Any], use_cache: bool = True) -> Dict[str, Any]:
    """POST the filter object to the flight API and return its normalised response."""
    api_cfg = get_search_cfg().get("flight_api", {})
    url = api_cfg.get("url")
    if not url:
        raise FlightServiceError("flight API URL not configured")

    cache = get_cache()
    key = make_cache_key(filters)
    if use_cache:
        cached = cache.get(key)
        if cached is not None:
            return cached

    try:
        response = httpx.post(url, json=filters, timeout=api_cfg.get("timeout", 30))
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as exc:
        logger.exception("Error fetching flights")
        raise FlightServiceError(f"API error: {exc}") from exc
    except ValueError as exc:
        raise FlightServiceError("flight API returned invalid JSON") from exc

    payload = _normalize_response(data)
    if use_cache:
        cache.set(key, payload)
    return payload
