from labtrack.services.biomarker_info import BIOMARKER_INFO, get_biomarker_info, has_biomarker_info


def test_lookup_exact_case_insensitive_and_loose():
    assert get_biomarker_info("ALT")["low_reasons"] == ["Low B6"]
    assert get_biomarker_info("alt")["name"] == "ALT"
    assert get_biomarker_info("Vitamin D 25-Hydroxy D")["name"] == "Vitamin D (25-Hydroxy D)"


def test_lookup_through_catalogue_alias():
    info = get_biomarker_info("Alkaline Phosphatase")
    assert info["name"] == "ALP"
    assert "Zinc deficiency" in info["low_reasons"]


def test_unknown_biomarker():
    assert get_biomarker_info("Unobtainium") is None
    assert not has_biomarker_info("Unobtainium")


def test_returned_lists_are_copies():
    get_biomarker_info("ALT")["high_reasons"].append("edited")
    assert "edited" not in BIOMARKER_INFO["ALT"]["high_reasons"]


def test_info_endpoint(client):
    r = client.get("/api/biomarkers/TSH/info")
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "TSH"
    assert body["description"]
    assert body["what_next"]

    missing = client.get("/api/biomarkers/Unobtainium/info")
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"

    names = client.get("/api/biomarkers/info").json()
    assert "Ferritin" in names and names == sorted(names)
