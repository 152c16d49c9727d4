from __future__ import annotations

from fastapi import APIRouter, Query

from app.schemas.history import HistoryResponse
from app.services.query_service import list_history

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
def history_endpoint(limit: int = Query(default=10, ge=1, le=100)) -> HistoryResponse:
    return HistoryResponse(records=list_history(limit))
