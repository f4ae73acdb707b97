import pytest

from labtrack.models.audit import AuditLog
from labtrack.services.audit import record_event

VALID_API_KEY = "sk-ant-api03-" + "a" * 40
CUSTOM_FERRITIN = {"name": "Ferritin", "male_range": "50-150 ug/L", "female_range": "30-100 ug/L"}


def _actions(client, **params):
    r = client.get("/api/audit-logs", params=params)
    assert r.status_code == 200, r.text
    return [e["action"] for e in r.json()]


def test_client_changes_are_audited_newest_first(client):
    created = client.post("/api/clients", json={"full_name": "Jane Doe"}).json()
    client.patch(f"/api/clients/{created['id']}", json={"notes": "fasting"})
    client.post(f"/api/clients/{created['id']}/archive")
    assert client.delete(f"/api/clients/{created['id']}").status_code == 204

    assert _actions(client) == ["delete_client", "update_client", "update_client", "create_client"]
    entries = client.get("/api/audit-logs").json()
    archived = entries[1]
    assert archived["resource_type"] == "client"
    assert archived["resource_id"] == created["id"]
    assert archived["metadata"]["status"] == {"old": "active", "new": "past"}
    assert entries[-1]["metadata"] == {"client_name": "Jane Doe"}


def test_analysis_and_benchmark_changes_are_audited(client):
    r = client.post("/api/analyses", json={
        "new_client": {"full_name": "Jane Doe"},
        "lab_test_date": "2024-03-01",
        "biomarkers": [{"name": "Ferritin", "value": "80", "unit": "ug/L"}],
    })
    analysis = r.json()
    client.delete(f"/api/analyses/{analysis['id']}")
    bench = client.post("/api/benchmarks", json=CUSTOM_FERRITIN).json()
    client.patch(f"/api/benchmarks/{bench['id']}", json={"is_active": False})
    client.post("/api/benchmarks/reset")

    assert _actions(client) == [
        "reset_benchmarks",
        "update_benchmark",
        "create_benchmark",
        "delete_analysis",
        "create_analysis",
        "create_client",
    ]
    assert _actions(client, action="create_analysis", limit=1) == ["create_analysis"]


def test_rejected_changes_leave_no_entry(client):
    client.post("/api/benchmarks", json=CUSTOM_FERRITIN)
    assert client.post("/api/benchmarks", json=CUSTOM_FERRITIN).status_code == 400
    assert client.put("/api/settings", json={"api_key": "bad"}).status_code == 400
    assert _actions(client) == ["create_benchmark"]


def test_settings_audit_never_contains_the_key(client):
    client.put("/api/settings", json={"api_key": VALID_API_KEY, "preferences": {"default_gender": "female"}})
    [entry] = client.get("/api/audit-logs", params={"action": "update_settings"}).json()
    assert entry["metadata"] == {"api_key_set": True, "api_key_changed": True, "preferences": ["default_gender"]}
    assert VALID_API_KEY not in str(entry)


def test_entries_are_scoped_to_the_owner(client, db):
    record_event(db, "someone-else", "create_client", "client", "c-1")
    db.commit()
    assert db.query(AuditLog).count() == 1
    assert _actions(client) == []


def test_unknown_action_rejected(db):
    with pytest.raises(ValueError, match="drop_everything"):
        record_event(db, "user-1", "drop_everything")
