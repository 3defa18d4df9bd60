# tests/test_health.py

from __future__ import annotations


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200

    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "products-api"
    assert data["version"] == "0.1.0"
    assert data["env"] == "test"


def test_request_id_is_generated(client):
    r = client.get("/health")
    assert r.headers.get("X-Request-Id")


def test_request_id_is_echoed(client):
    r = client.get("/health", headers={"X-Request-Id": "req-123"})
    assert r.headers["X-Request-Id"] == "req-123"
