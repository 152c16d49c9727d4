"""Append/read log of natural-language queries with optional JSON persistence."""

from __future__ import annotations

import datetime as dt
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import QueryRecord

logger = logging.getLogger(__name__)


class QueryHistory:
    """In-memory query log, snapshotted to disk after every append when a path is set."""

    def __init__(self, persist_path: Optional[Path] = None, max_records: int = 500):
        self.records: List[QueryRecord] = []
        self.persist_path = persist_path
        self.max_records = max_records
        if self.persist_path:
            self._load_from_disk()

    def append(
        self,
        user_query: str,
        parsed_filters: Optional[Dict[str, Any]],
        result_count: int,
    ) -> QueryRecord:
        """Record a query and return the stored entry."""
        record = QueryRecord(
            id=uuid.uuid4().hex,
            user_query=user_query,
            parsed_filters=dict(parsed_filters) if parsed_filters is not None else None,
            result_count=int(result_count),
            created_at=dt.datetime.now(dt.timezone.utc),
        )
        self.records.append(record)
        if len(self.records) > self.max_records:
            self.records = self.records[-self.max_records:]
        self._persist()
        return record

    def recent(self, limit: int = 10) -> List[QueryRecord]:
        """Return up to ``limit`` records, newest first."""
        if limit <= 0:
            return []
        ordered = sorted(self.records, key=lambda record: record.created_at, reverse=True)
        return ordered[:limit]

    def clear(self) -> None:
        """Drop every record and rewrite the snapshot."""
        self.records.clear()
        self._persist()

    # persistence helpers
    def _persist(self) -> None:
        if not self.persist_path:
            return
        snapshot = {"records": [record.to_dict() for record in self.records]}
        self.persist_path.parent.mkdir(parents=True, exist_ok=True)
        self.persist_path.write_text(json.dumps(snapshot), encoding="utf-8")

    def _load_from_disk(self) -> None:
        if not self.persist_path or not self.persist_path.exists():
            return
        try:
            payload = json.loads(self.persist_path.read_text(encoding="utf-8"))
            records = [QueryRecord.from_dict(item) for item in payload.get("records", [])]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Ignoring unreadable query history at %s: %s", self.persist_path, exc)
            return
        self.records = records
