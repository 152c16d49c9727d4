from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class QueryRecordPayload(BaseModel):
    id: str
    user_query: str
    parsed_filters: Optional[Dict[str, Any]]
    result_count: int
    created_at: datetime


class HistoryResponse(BaseModel):
    records: List[QueryRecordPayload]
