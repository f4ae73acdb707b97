from fastapi.testclient import TestClient

from labtrack.app import app
from labtrack.db.session import get_db


def test_http_exception_envelope(client):
    r = client.get("/api/clients/does-not-exist")
    assert r.status_code == 404
    j = r.json()
    assert j["code"] == "NOT_FOUND"
    assert j["message"] == "Client not found"
    assert j["details"] == "Client not found"
    assert j["trace_id"] == r.headers["x-trace-id"]


def test_incoming_trace_id_is_propagated(client):
    r = client.get("/api/clients/missing", headers={"x-trace-id": "abc-123"})
    assert r.headers["x-trace-id"] == "abc-123"
    assert r.json()["trace_id"] == "abc-123"


def test_validation_error_envelope(client):
    r = client.post("/api/clients", json={"gender": "female"})
    assert r.status_code == 422
    j = r.json()
    assert j["code"] == "UNPROCESSABLE_ENTITY"
    assert isinstance(j["details"], list)
    assert "trace_id" in j


def test_unhandled_exception_envelope(monkeypatch):
    import labtrack.services.clients as client_service

    def _boom(*_a, **_k):
        raise RuntimeError("boom")

    monkeypatch.setattr(client_service, "list_clients", _boom)
    r = TestClient(app, raise_server_exceptions=False).get("/api/clients")
    assert r.status_code == 500
    j = r.json()
    assert j["code"] == "INTERNAL_SERVER_ERROR"
    assert j["details"] == "boom"
    assert "trace_id" in j


def test_missing_database_is_503(client, monkeypatch):
    import labtrack.db.session as session_mod

    override = app.dependency_overrides.pop(get_db)
    monkeypatch.setattr(session_mod, "SessionLocal", None)
    try:
        r = client.get("/api/clients")
    finally:
        app.dependency_overrides[get_db] = override
    assert r.status_code == 503
    j = r.json()
    assert j["code"] == "SERVICE_UNAVAILABLE"
    assert j["message"].startswith("Database is not configured")


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
