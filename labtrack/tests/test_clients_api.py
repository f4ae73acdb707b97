from labtrack.models.client import Client


def _create(client, **fields):
    body = {"full_name": "Jane Doe", **fields}
    r = client.post("/api/clients", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_get_client(client):
    created = _create(client, date_of_birth="1980-05-01", gender="female", tags=["vip"])
    assert created["status"] == "active"
    assert created["tags"] == ["vip"]

    r = client.get(f"/api/clients/{created['id']}")
    assert r.status_code == 200
    assert r.json()["date_of_birth"] == "1980-05-01"


def test_create_client_validation(client):
    assert client.post("/api/clients", json={"full_name": ""}).status_code == 422
    assert client.post("/api/clients", json={"full_name": "A", "gender": "unknown"}).status_code == 422
    assert client.post("/api/clients", json={"full_name": "   "}).status_code == 400


def test_list_and_status_filter(client):
    jane = _create(client)
    john = _create(client, full_name="John Smith")
    client.post(f"/api/clients/{john['id']}/archive")

    all_ids = {c["id"] for c in client.get("/api/clients").json()}
    assert all_ids == {jane["id"], john["id"]}
    past = client.get("/api/clients", params={"status": "past"}).json()
    assert [c["id"] for c in past] == [john["id"]]
    active = client.get("/api/clients", params={"status": "active"}).json()
    assert [c["id"] for c in active] == [jane["id"]]


def test_archive_and_reactivate(client):
    jane = _create(client)
    r = client.post(f"/api/clients/{jane['id']}/archive")
    assert r.json()["status"] == "past"
    r = client.post(f"/api/clients/{jane['id']}/reactivate")
    assert r.json()["status"] == "active"


def test_search_matches_every_word(client):
    _create(client, full_name="Jane Doe")
    _create(client, full_name="John Smith")
    names = lambda q: [c["full_name"] for c in client.get("/api/clients/search", params={"q": q}).json()]
    assert names("jane") == ["Jane Doe"]
    assert names("DOE jane") == ["Jane Doe"]
    assert names("jane smith") == []


def test_update_client(client):
    jane = _create(client)
    r = client.patch(f"/api/clients/{jane['id']}", json={"notes": "Prefers mornings", "gender": "female"})
    assert r.status_code == 200
    body = r.json()
    assert body["notes"] == "Prefers mornings"
    assert body["gender"] == "female"
    assert body["full_name"] == "Jane Doe"


def test_other_users_client_is_not_found(client, db):
    other = Client(user_id="user-2", full_name="Someone Else", status="active", tags=[])
    db.add(other)
    db.commit()

    assert client.get(f"/api/clients/{other.id}").status_code == 404
    assert client.delete(f"/api/clients/{other.id}").status_code == 404
    assert client.get("/api/clients").json() == []


def test_delete_client_removes_analyses(client):
    jane = _create(client)
    r = client.post("/api/analyses", json={
        "client_id": jane["id"],
        "lab_test_date": "2024-01-01",
        "biomarkers": [{"name": "Ferritin", "value": "80", "unit": "µg/L"}],
    })
    assert r.status_code == 201
    analysis_id = r.json()["id"]

    assert client.delete(f"/api/clients/{jane['id']}").status_code == 204
    assert client.get(f"/api/clients/{jane['id']}").status_code == 404
    assert client.get(f"/api/analyses/{analysis_id}").status_code == 404


def test_match_endpoint(client):
    jane = _create(client, date_of_birth="1980-05-01", gender="female")
    r = client.post("/api/clients/match", json={"name": "Doe, Jane", "date_of_birth": "1980-05-01"})
    assert r.status_code == 200
    body = r.json()
    assert body["suggested_action"] == "use-existing"
    assert body["confidence"] == "high"
    assert body["client_id"] == jane["id"]
    assert body["client"]["full_name"] == "Jane Doe"

    r = client.post("/api/clients/match", json={})
    assert r.json()["suggested_action"] == "manual-select"


def test_merge_moves_analyses_and_archives_source(client):
    source = _create(client, full_name="Jane Doe")
    target = _create(client, full_name="Jane A. Doe")
    client.post("/api/analyses", json={
        "client_id": source["id"],
        "lab_test_date": "2024-01-01",
        "biomarkers": [{"name": "TSH", "value": "2.0", "unit": "mIU/L"}],
    })

    r = client.post(f"/api/clients/{source['id']}/merge", json={"target_id": target["id"]})
    assert r.status_code == 200
    body = r.json()
    assert body["moved_analyses"] == 1
    assert body["source"]["status"] == "past"
    assert "Merged into Jane A. Doe" in body["source"]["notes"]

    assert client.get(f"/api/clients/{source['id']}/analyses").json() == []
    assert len(client.get(f"/api/clients/{target['id']}/analyses").json()) == 1


def test_merge_into_itself_is_rejected(client):
    jane = _create(client)
    r = client.post(f"/api/clients/{jane['id']}/merge", json={"target_id": jane["id"]})
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot merge a client into itself"
