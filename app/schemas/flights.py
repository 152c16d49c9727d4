from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import CanonicalBucket


class FlightFilters(BaseModel):
    service_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    limit: int = Field(default=20, ge=1)
    departure_time_range: List[CanonicalBucket] = Field(default_factory=list)
    origin_data: Optional[str] = None
    destination_data: Optional[str] = None
    airline_data: Optional[str] = None
    route_data: Optional[str] = None
    sortBy: Optional[Literal["departure_time", "arrival_time", "airline"]] = None
    startAfterDocId: Optional[str] = None


class FlightData(BaseModel):
    model_config = ConfigDict(extra="allow")

    flight_number: Optional[str] = None
    airline_iata: Optional[str] = None
    aircraft_model_text: Optional[str] = None
    origin_airport_name: Optional[str] = None
    origin_iata: Optional[str] = None
    destination_airport_name: Optional[str] = None
    destination_iata: Optional[str] = None
    dep_hhmm_local: Optional[str] = None
    service_date: Optional[str] = None
    is_placeholder: Optional[bool] = None


class FlightItem(BaseModel):
    id: str
    data: FlightData = Field(default_factory=FlightData)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class FlightResponse(BaseModel):
    ok: bool
    count: int
    nextPageToken: Optional[str] = None
    items: List[FlightItem]
