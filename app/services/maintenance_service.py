"""Maintenance helpers for clearing caches and the query history."""

from __future__ import annotations

from typing import Dict

from app.deps import get_cache, get_history


def purge_system() -> Dict[str, str]:
    """Clear cached flight responses and every recorded query."""
    get_history().clear()
    get_cache().clear()
    return {"status": "ok", "history": "cleared", "cache": "cleared"}
