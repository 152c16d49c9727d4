from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from app.deps import get_app_state
from app.main import create_app
from app.services import flight_service


class FailingBackend:
    def generate(self, messages, max_tokens, temperature, stop=None):
        raise httpx.ConnectError("no route to extractor")


@pytest.fixture
def client(monkeypatch):
    state = get_app_state()
    state.history.clear()
    state.cache.clear()

    def fake_post(url, json=None, timeout=None):
        payload = {"ok": True, "count": 0, "nextPageToken": None, "items": []}
        return httpx.Response(200, json=payload, request=httpx.Request("POST", url))

    monkeypatch.setattr(flight_service.httpx, "post", fake_post)
    return TestClient(create_app())


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_parse_endpoint(client):
    response = client.post("/query/parse", json={"query": "flights between 15:00 and 23:00"})
    assert response.status_code == 200
    body = response.json()
    assert body["filters"]["departure_time_range"] == ["afternoon", "evening"]
    assert body["time_range_source"] == "fallback"
    assert body["fallback_rule"] == "between_clocks"


def test_blank_query_is_rejected(client):
    assert client.post("/query/parse", json={"query": "   "}).status_code == 422


def test_transport_failure_maps_to_502(client, monkeypatch):
    monkeypatch.setattr(get_app_state(), "_backend", (FailingBackend(), "failing"))
    response = client.post("/query/parse", json={"query": "late night to MNL"})
    assert response.status_code == 502
    assert response.json()["detail"] == "QUERY_PARSE_FAILED"


def test_search_then_history(client):
    response = client.post("/query/search", json={"query": "evening flights to LHR"})
    assert response.status_code == 200
    assert response.json()["filters"]["departure_time_range"] == ["evening"]

    history = client.get("/history", params={"limit": 5}).json()
    assert history["records"][0]["user_query"] == "evening flights to LHR"


def test_manual_flight_search_validates_buckets(client):
    ok = client.post("/flights", json={"service_date": "2025-10-09", "departure_time_range": ["night"]})
    assert ok.status_code == 200
    assert ok.json()["count"] == 0
    bad = client.post("/flights", json={"service_date": "2025-10-09", "departure_time_range": ["brunch"]})
    assert bad.status_code == 422


def test_time_buckets_lists_vocabulary(client):
    buckets = client.get("/time-buckets").json()["buckets"]
    assert [entry["bucket"] for entry in buckets] == ["morning", "afternoon", "evening", "night"]
    assert buckets[-1]["segments"] == [{"from": "23:00", "to": "23:59"}, {"from": "00:00", "to": "04:59"}]


def _serve_flights(monkeypatch, payload):
    def fake_post(url, json=None, timeout=None):
        return httpx.Response(200, json=payload, request=httpx.Request("POST", url))

    monkeypatch.setattr(flight_service.httpx, "post", fake_post)


def test_search_accepts_loosely_shaped_items(client, monkeypatch):
    _serve_flights(
        monkeypatch,
        {
            "ok": True,
            "items": [
                {"id": 17, "data": {"flight_number": "QF1", "gate": "B7"}},
                {"id": "f-2"},
            ],
        },
    )
    response = client.post("/query/search", json={"query": "morning flights to SIN"})
    assert response.status_code == 200
    flights = response.json()["flights"]
    assert flights["count"] == 2
    assert [item["id"] for item in flights["items"]] == ["17", "f-2"]
    assert flights["items"][0]["data"]["gate"] == "B7"

    history = client.get("/history", params={"limit": 5}).json()
    assert history["records"][0]["user_query"] == "morning flights to SIN"


def test_malformed_items_map_to_502_without_history(client, monkeypatch):
    _serve_flights(monkeypatch, {"ok": True, "items": [{"id": "f-1", "data": "oops"}, "not-an-item"]})
    response = client.post("/query/search", json={"query": "night flights to MNL"})
    assert response.status_code == 502
    assert response.json()["detail"] == "FLIGHT_SEARCH_FAILED"
    assert client.get("/history").json()["records"] == []

    manual = client.post("/flights", json={"service_date": "2025-10-09"})
    assert manual.status_code == 502
    assert manual.json()["detail"] == "FLIGHT_SEARCH_FAILED"
