"""Tests for health probes and response headers."""

import pytest


def test_livez(client):
    resp = client.get("/livez")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_livez_ignores_database(client, db):
    db.fail_with = ConnectionError("database unreachable")
    assert client.get("/livez").status_code == 200


@pytest.mark.parametrize("path", ["/readyz", "/healthz", "/health"])
def test_ready_when_database_up(client, path):
    resp = client.get(path)
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db": "up"}


@pytest.mark.parametrize("path", ["/readyz", "/healthz", "/health"])
def test_degraded_when_database_down(client, db, path):
    db.fail_with = ConnectionError("database unreachable")
    resp = client.get(path)
    assert resp.status_code == 503
    assert resp.json() == {"status": "degraded", "db": "down"}


def test_security_headers(client):
    resp = client.get("/livez")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["Referrer-Policy"] == "no-referrer"


def test_request_id_generated(client):
    resp = client.get("/livez")
    assert len(resp.headers["X-Request-ID"]) == 32


def test_request_id_propagated(client):
    resp = client.get("/livez", headers={"X-Request-ID": "trace-123"})
    assert resp.headers["X-Request-ID"] == "trace-123"


def test_error_envelope_carries_request_id(client):
    resp = client.get("/api/v1/rooms/nope/messages", headers={"X-Request-ID": "trace-404"})
    assert resp.status_code == 404
    assert resp.json() == {
        "status": "error",
        "error": {"type": "not_found", "message": "Room not found", "request_id": "trace-404"},
    }


def test_cors_allows_localhost_outside_production(client):
    resp = client.get("/livez", headers={"Origin": "http://localhost:5173"})
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_cors_ignores_unknown_origin(client):
    resp = client.get("/livez", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in resp.headers
