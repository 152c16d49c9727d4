from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.schemas.flights import FlightFilters, FlightResponse
from app.services.flight_service import FlightServiceError, fetch_flights

router = APIRouter()


@router.post("/flights", response_model=FlightResponse)
def flights_endpoint(payload: FlightFilters) -> FlightResponse:
    try:
        data = fetch_flights(payload.model_dump(mode="json", exclude_none=True))
    except FlightServiceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="FLIGHT_SEARCH_FAILED") from exc
    return FlightResponse(**data)
