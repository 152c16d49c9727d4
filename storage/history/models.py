"""Dataclass representing one persisted natural-language query."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class QueryRecord:
    """A user query, the filters it resolved to, and how many flights came back."""

    id: str
    user_query: str
    parsed_filters: Optional[Dict[str, Any]]
    result_count: int
    created_at: dt.datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_query": self.user_query,
            "parsed_filters": self.parsed_filters,
            "result_count": self.result_count,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "QueryRecord":
        return cls(
            id=payload["id"],
            user_query=payload["user_query"],
            parsed_filters=payload.get("parsed_filters"),
            result_count=int(payload.get("result_count", 0)),
            created_at=_parse_ts(payload["created_at"]),
        )


def _parse_ts(value: str) -> dt.datetime:
    parsed = dt.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.timezone.utc)
    return parsed
