from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.schemas.query import AISearchResponse, QueryParseResponse, QueryRequest
from app.services.flight_service import FlightServiceError
from app.services.query_service import QueryParseError, parse_natural_language_query, run_ai_query
from app.utils.time_windows import VOCABULARY

router = APIRouter()


@router.post("/query/parse", response_model=QueryParseResponse)
def parse_endpoint(payload: QueryRequest) -> QueryParseResponse:
    try:
        resolution = parse_natural_language_query(payload.query)
    except QueryParseError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="QUERY_PARSE_FAILED") from exc
    return QueryParseResponse(**resolution.to_dict())


@router.post("/query/search", response_model=AISearchResponse)
def search_endpoint(payload: QueryRequest) -> AISearchResponse:
    try:
        response = run_ai_query(payload.query)
    except QueryParseError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="QUERY_PARSE_FAILED") from exc
    except FlightServiceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="FLIGHT_SEARCH_FAILED") from exc
    return AISearchResponse(**response)


@router.get("/time-buckets")
def time_buckets_endpoint() -> dict:
    return {"buckets": [entry.to_payload() for entry in VOCABULARY]}
