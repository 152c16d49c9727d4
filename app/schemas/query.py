from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import ExtractionStatus, TimeRangeSource
from app.schemas.flights import FlightResponse


class QueryRequest(BaseModel):
    query: str = Field(..., max_length=500)

    @field_validator("query")
    @classmethod
    def ensure_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query must not be blank")
        return value.strip()


class QueryParseResponse(BaseModel):
    filters: Dict[str, Any]
    time_range_source: TimeRangeSource
    extraction_status: ExtractionStatus
    fallback_rule: Optional[str] = None


class AISearchResponse(QueryParseResponse):
    flights: FlightResponse
