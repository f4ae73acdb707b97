import json

from labtrack.services.biomarkers import DEFAULT_BENCHMARKS

CUSTOM_GLUCOSE = {
    "name": "Fasting Glucose",
    "male_range": "3.9-5.5 mmol/L",
    "female_range": "3.9-5.5 mmol/L",
    "units": ["mmol/L"],
    "category": "Metabolic",
    "aliases": ["Glucose"],
}


def _by_name(rows):
    return {b["name"]: b for b in rows}


def test_defaults_listed_without_custom_rows(client):
    rows = client.get("/api/benchmarks").json()
    assert len(rows) == len(DEFAULT_BENCHMARKS)
    assert not any(b["is_custom"] for b in rows)


def test_custom_benchmark_overrides_default(client):
    r = client.post("/api/benchmarks", json=CUSTOM_GLUCOSE)
    assert r.status_code == 201, r.text
    assert r.json()["is_custom"] is True

    rows = client.get("/api/benchmarks").json()
    assert len(rows) == len(DEFAULT_BENCHMARKS)
    glucose = _by_name(rows)["Fasting Glucose"]
    assert glucose["is_custom"] is True
    assert glucose["male_range"] == "3.9-5.5 mmol/L"


def test_custom_ranges_change_analysis_status(client):
    client.post("/api/benchmarks", json=CUSTOM_GLUCOSE)
    jane = client.post("/api/clients", json={"full_name": "Jane Doe"}).json()
    body = client.post("/api/analyses", json={
        "client_id": jane["id"],
        "biomarkers": [{"name": "Glucose", "value": "5.3", "unit": "mmol/L"}],
    }).json()
    glucose = next(r for r in body["results"] if r["biomarker_name"] == "Fasting Glucose")
    assert glucose["optimal_range"] == "3.9-5.5 mmol/L"
    assert glucose["status"] == "in-range"


def test_duplicate_and_invalid_custom_benchmarks(client):
    assert client.post("/api/benchmarks", json=CUSTOM_GLUCOSE).status_code == 201
    dup = client.post("/api/benchmarks", json=CUSTOM_GLUCOSE)
    assert dup.status_code == 400
    assert "already exists" in dup.json()["message"]

    no_range = client.post("/api/benchmarks", json={"name": "Zinc"})
    assert no_range.status_code == 400


def test_update_and_deactivate(client):
    created = client.post("/api/benchmarks", json=CUSTOM_GLUCOSE).json()
    r = client.patch(f"/api/benchmarks/{created['id']}", json={"is_active": False})
    assert r.status_code == 200
    assert r.json()["is_active"] is False

    active = _by_name(client.get("/api/benchmarks").json())
    assert "Fasting Glucose" not in active
    everything = _by_name(client.get("/api/benchmarks", params={"include_inactive": True}).json())
    assert everything["Fasting Glucose"]["is_active"] is False


def test_null_is_active_rejected(client):
    created = client.post("/api/benchmarks", json=CUSTOM_GLUCOSE).json()
    r = client.patch(f"/api/benchmarks/{created['id']}", json={"is_active": None})
    assert r.status_code == 400
    assert r.json()["message"] == "is_active must be true or false"
    row = _by_name(client.get("/api/benchmarks", params={"include_inactive": True}).json())["Fasting Glucose"]
    assert row["is_active"] is True


def test_delete_custom_and_missing_ids(client):
    created = client.post("/api/benchmarks", json=CUSTOM_GLUCOSE).json()
    assert client.delete(f"/api/benchmarks/{created['id']}").status_code == 204
    assert client.delete(f"/api/benchmarks/{created['id']}").status_code == 404
    # catalogue entries are not editable rows
    assert client.patch("/api/benchmarks/default-0", json={"is_active": False}).status_code == 404


def test_seed_and_reset(client):
    assert client.post("/api/benchmarks/seed").json() == {"added": len(DEFAULT_BENCHMARKS)}
    assert client.post("/api/benchmarks/seed").json() == {"added": 0}
    rows = client.get("/api/benchmarks").json()
    assert all(b["is_custom"] for b in rows)

    assert client.post("/api/benchmarks/reset").json() == {"deleted": len(DEFAULT_BENCHMARKS)}
    assert not any(b["is_custom"] for b in client.get("/api/benchmarks").json())


def test_export_then_import(client):
    client.post("/api/benchmarks", json=CUSTOM_GLUCOSE)
    r = client.get("/api/benchmarks/export")
    assert r.status_code == 200
    assert "attachment" in r.headers["content-disposition"]
    exported = json.loads(r.text)
    assert len(exported) == len(DEFAULT_BENCHMARKS)

    client.post("/api/benchmarks/reset")
    r = client.post("/api/benchmarks/import", json=exported)
    assert r.json() == {"imported": 1}
    assert _by_name(client.get("/api/benchmarks").json())["Fasting Glucose"]["is_custom"] is True


def test_import_rejects_duplicate_names(client):
    entry = {**CUSTOM_GLUCOSE, "is_custom": True}
    r = client.post("/api/benchmarks/import", json=[entry, entry])
    assert r.status_code == 422
    assert r.json()["code"] == "UNPROCESSABLE_ENTITY"
