from __future__ import annotations

from app.deps import get_cache, get_history
from app.services.maintenance_service import purge_system


def test_purge_system_clears_history_and_cache():
    history = get_history()
    history.clear()
    cache = get_cache()
    cache.clear()

    history.append("morning flights to SYD", {"departure_time_range": ["morning"]}, 3)
    assert history.recent(), "Expected a record after append"
    cache.set("flightquery:flights:test", {"count": 1})
    assert cache.get("flightquery:flights:test") is not None

    status = purge_system()
    assert status["history"] == "cleared"
    assert status["cache"] == "cleared"
    assert history.recent() == []
    assert cache.get("flightquery:flights:test") is None
