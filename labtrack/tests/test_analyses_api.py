import threading
from datetime import datetime, timedelta, date

from fastapi.testclient import TestClient

from labtrack.app import app
from labtrack.models.analysis import Analysis
from labtrack.services.biomarkers import DEFAULT_BENCHMARKS
from labtrack.services.extraction import ExtractionError, ExtractionResult

LAB_TEXT = (
    "Laboratory report\nPatient: Jane Doe\nDOB 1980-05-01\n"
    "Glucose 100 mg/dL\nHemoglobin 150 g/L\nreference range 80-90\n"
)
JANE = {"name": "Jane Doe", "date_of_birth": "1980-05-01", "gender": "female", "test_date": "2024-03-01"}
BIOMARKERS = [
    {"name": "Glucose", "value": "100", "unit": "mg/dL"},
    {"name": "Hemoglobin", "value": "140", "unit": "g/L"},
]


def _files(*names):
    return [("files", (n, LAB_TEXT.encode("utf-8"), "text/plain")) for n in names]


def _new_client(client, **fields):
    r = client.post("/api/clients", json={"full_name": "Jane Doe", **fields})
    assert r.status_code == 201
    return r.json()


def _result(body, name):
    return next(r for r in body["results"] if r["biomarker_name"] == name)


def test_extract_returns_review_payload(client, fake_extraction, upload_dir):
    fake_extraction.replies["*"] = (BIOMARKERS, JANE)
    r = client.post("/api/analyses/extract", files=_files("labs.txt"))
    assert r.status_code == 200, r.text
    body = r.json()

    assert fake_extraction.calls == ["labs.txt"]
    assert body["patient_info"]["name"] == "Jane Doe"
    assert body["lab_test_date"] == "2024-03-01"
    assert body["skipped"] == []
    assert body["client_match"]["suggested_action"] == "create-new"
    assert body["client_match"]["client"] is None

    glucose = _result(body, "Fasting Glucose")
    assert glucose["value"] == "5.55"
    assert glucose["unit"] == "mmol/L"
    assert glucose["status"] == "out-of-range"
    assert _result(body, "Hemoglobin")["status"] == "in-range"
    assert body["summary"]["total_biomarkers"] == len(DEFAULT_BENCHMARKS)
    assert body["summary"]["measured_biomarkers"] == 2

    stored = body["stored_files"]
    assert len(stored) == 1
    assert (upload_dir / "user-1" / stored[0]).exists()


def test_extract_matches_existing_client(client, fake_extraction):
    jane = _new_client(client, date_of_birth="1980-05-01", gender="female")
    fake_extraction.replies["*"] = (BIOMARKERS, JANE)
    body = client.post("/api/analyses/extract", files=_files("labs.txt")).json()
    match = body["client_match"]
    assert match["suggested_action"] == "use-existing"
    assert match["confidence"] == "high"
    assert match["client"]["id"] == jane["id"]


def test_extract_consolidates_multiple_files(client, fake_extraction):
    fake_extraction.replies["jan.txt"] = (
        [{"name": "Ferritin", "value": "80", "unit": "µg/L"}],
        {**JANE, "test_date": "2024-01-01"},
    )
    fake_extraction.replies["mar.txt"] = (
        [{"name": "Ferritin", "value": "95", "unit": "µg/L"}],
        {**JANE, "name": "JANE DOE"},
    )
    body = client.post("/api/analyses/extract", files=_files("jan.txt", "mar.txt")).json()
    assert len(body["files"]) == 2
    assert body["lab_test_date"] == "2024-03-01"
    assert any(d.startswith("Test Dates") for d in body["discrepancies"])
    assert _result(body, "Ferritin")["value"] == "95"


def test_extract_skips_non_lab_files(client, fake_extraction, upload_dir):
    fake_extraction.replies["*"] = (BIOMARKERS, JANE)
    files = _files("labs.txt") + [("files", ("note.txt", b"hello there", "text/plain"))]
    body = client.post("/api/analyses/extract", files=files).json()
    assert fake_extraction.calls == ["labs.txt"]
    assert [s["filename"] for s in body["skipped"]] == ["note.txt"]
    assert len(body["stored_files"]) == 1
    assert [p.name for p in (upload_dir / "user-1").iterdir()] == body["stored_files"]


def test_extract_with_no_lab_content_is_422(client, fake_extraction):
    r = client.post("/api/analyses/extract", files=[("files", ("note.txt", b"hello there", "text/plain"))])
    assert r.status_code == 422
    assert r.json()["message"].startswith("No lab data found")
    assert fake_extraction.calls == []


def test_extract_rejects_unsupported_file(client, fake_extraction):
    r = client.post("/api/analyses/extract", files=[("files", ("doc.docx", b"abc", "application/msword"))])
    assert r.status_code == 400


def test_extract_without_api_key(client, monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    r = client.post("/api/analyses/extract", files=_files("labs.txt"))
    assert r.status_code == 400
    assert "No API key configured" in r.json()["message"]


def test_extract_api_failure_is_502(client, fake_extraction, monkeypatch):
    def _boom(api_key, doc):
        raise ExtractionError("Invalid API key. Please check your Claude API key.")

    monkeypatch.setattr("labtrack.services.report_pipeline.extract_biomarkers", _boom)
    r = client.post("/api/analyses/extract", files=_files("labs.txt"))
    assert r.status_code == 502
    assert r.json()["code"] == "BAD_GATEWAY"


def test_failed_extraction_leaves_no_files(client, fake_extraction, monkeypatch, upload_dir):
    def _boom(api_key, doc):
        raise ExtractionError("The AI service is temporarily unavailable.")

    monkeypatch.setattr("labtrack.services.report_pipeline.extract_biomarkers", _boom)
    files = _files("labs.txt") + [("files", ("note.txt", b"hello there", "text/plain"))]
    r = client.post("/api/analyses/extract", files=files)
    assert r.status_code == 502
    assert not upload_dir.exists() or not any(upload_dir.rglob("*.txt"))


def test_extract_does_not_block_other_requests(fake_extraction, monkeypatch):
    started, release = threading.Event(), threading.Event()
    finished = []

    def _slow(api_key, doc):
        started.set()
        release.wait(timeout=5)
        finished.append(doc.filename)
        return ExtractionResult(doc.filename, [dict(b) for b in BIOMARKERS], dict(JANE), "Lab Panel")

    monkeypatch.setattr("labtrack.services.report_pipeline.extract_biomarkers", _slow)
    responses = []
    with TestClient(app) as shared:
        worker = threading.Thread(
            target=lambda: responses.append(shared.post("/api/analyses/extract", files=_files("labs.txt")))
        )
        worker.start()
        assert started.wait(timeout=5)
        health = shared.get("/api/health")
        extraction_still_running = not finished
        release.set()
        worker.join(timeout=10)

    assert health.status_code == 200
    assert extraction_still_running
    assert responses[0].status_code == 200


def test_confirm_with_new_client_and_upsert_by_date(client):
    payload = {
        "new_client": {"full_name": "Jane Doe", "gender": "female"},
        "lab_test_date": "2024-03-01",
        "biomarkers": [{"name": "Fasting Glucose", "value": "4.8", "unit": "mmol/L"}],
        "notes": "fasted 12h",
    }
    r = client.post("/api/analyses", json=payload)
    assert r.status_code == 201, r.text
    first = r.json()
    assert _result(first, "Fasting Glucose")["status"] == "in-range"
    assert first["summary"]["measured_biomarkers"] == 1
    assert first["summary"]["in_range_count"] == 1
    assert first["panel_name"] == "Metabolic Panel"

    client_id = first["client_id"]
    again = client.post("/api/analyses", json={
        "client_id": client_id,
        "lab_test_date": "2024-03-01",
        "biomarkers": [{"name": "Fasting Glucose", "value": "5.6", "unit": "mmol/L"}],
    }).json()
    assert again["id"] == first["id"]
    assert again["notes"] == "fasted 12h"
    assert _result(again, "Fasting Glucose")["status"] == "out-of-range"
    assert len(client.get(f"/api/clients/{client_id}/analyses").json()) == 1


def test_confirm_requires_client(client):
    r = client.post("/api/analyses", json={"biomarkers": []})
    assert r.status_code == 400
    r = client.post("/api/analyses", json={"client_id": "missing", "biomarkers": []})
    assert r.status_code == 404


def test_confirm_auto_creates_client_from_patient_info(client):
    r = client.post("/api/analyses", json={
        "patient_info": JANE,
        "lab_test_date": "2024-03-01",
        "biomarkers": BIOMARKERS,
    })
    assert r.status_code == 201, r.text
    created = client.get(f"/api/clients/{r.json()['client_id']}").json()
    assert created["full_name"] == "Jane Doe"
    assert created["date_of_birth"] == "1980-05-01"
    assert created["notes"] == "Auto-created from lab report"

    r = client.post("/api/analyses", json={"patient_info": {"gender": "male"}, "biomarkers": []})
    assert r.status_code == 400
    assert "name is required" in r.json()["message"]


def test_update_and_delete_analysis(client):
    jane = _new_client(client)
    created = client.post("/api/analyses", json={
        "client_id": jane["id"],
        "lab_test_date": "2024-01-01",
        "biomarkers": [{"name": "Ferritin", "value": "80", "unit": "µg/L"}],
    }).json()
    assert created["summary"]["in_range_count"] == 1

    results = created["results"]
    for row in results:
        if row["biomarker_name"] == "Ferritin":
            row["value"] = "300"
    r = client.patch(f"/api/analyses/{created['id']}", json={"results": results, "notes": "recheck"})
    assert r.status_code == 200
    body = r.json()
    assert body["notes"] == "recheck"
    assert body["summary"]["in_range_count"] == 0
    assert body["summary"]["out_of_range_count"] == 1

    assert client.delete(f"/api/analyses/{created['id']}").status_code == 204
    assert client.get(f"/api/analyses/{created['id']}").status_code == 404


def test_dedupe_keeps_newest_per_date(client, db):
    jane = _new_client(client)
    now = datetime(2024, 3, 2, 12, 0)
    for offset in (0, 1, 2):
        db.add(Analysis(
            user_id="user-1",
            client_id=jane["id"],
            lab_test_date=date(2024, 3, 1),
            results=[],
            summary={},
            notes=f"copy {offset}",
            created_at=now + timedelta(minutes=offset),
        ))
    db.commit()

    r = client.post(f"/api/clients/{jane['id']}/analyses/dedupe")
    assert r.json() == {"deleted": 2}
    remaining = client.get(f"/api/clients/{jane['id']}/analyses").json()
    assert [a["notes"] for a in remaining] == ["copy 2"]


def test_client_trends(client):
    jane = _new_client(client)
    for when, value in (("2024-01-01", "5.0"), ("2024-03-01", "5.5")):
        client.post("/api/analyses", json={
            "client_id": jane["id"],
            "lab_test_date": when,
            "biomarkers": [{"name": "Fasting Glucose", "value": value, "unit": "mmol/L"}],
        })

    body = client.get(f"/api/clients/{jane['id']}/trends").json()
    assert body["message"] is None
    assert [t["biomarker_name"] for t in body["trends"]] == ["Fasting Glucose"]
    trend = body["trends"][0]["trend"]
    assert trend["direction"] == "up"
    assert trend["percent_change"] == 10.0


def test_trends_need_two_analyses(client):
    jane = _new_client(client)
    body = client.get(f"/api/clients/{jane['id']}/trends").json()
    assert body["trends"] == []
    assert "At least 2 analyses" in body["message"]
