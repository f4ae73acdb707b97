import pytest

from labtrack.services.extraction import (
    ExtractionError,
    ExtractionResult,
    consolidate_patient_info,
    generate_panel_name,
    merge_biomarkers,
    parse_extraction_response,
    resolve_api_key,
    validate_api_key,
)

REPLY = """Here is the data:
```json
{
  "biomarkers": [
    {"name": "Hemoglobin", "value": 14.2, "unit": "g/dL"},
    {"name": "Total Cholesterol", "value": "5.1", "unit": "mmol/L"},
    {"name": "", "value": "1"}
  ],
  "patientInfo": {"name": "Jane Doe", "dateOfBirth": "1980-05-01", "gender": "F", "testDate": "2024-03-01T08:00:00"}
}
```"""


def test_parse_fenced_reply():
    biomarkers, info, panel = parse_extraction_response(REPLY)
    assert biomarkers == [
        {"name": "Hemoglobin", "value": "14.2", "unit": "g/dL"},
        {"name": "Total Cholesterol", "value": "5.1", "unit": "mmol/L"},
    ]
    assert info == {
        "name": "Jane Doe",
        "date_of_birth": "1980-05-01",
        "gender": "female",
        "test_date": "2024-03-01",
    }
    assert panel == "CBC + Lipid Panel"


def test_parse_rejects_bad_payloads():
    with pytest.raises(ExtractionError):
        parse_extraction_response("no json here")
    with pytest.raises(ExtractionError):
        parse_extraction_response('{"patientInfo": {}}')


def test_missing_patient_fields_are_none():
    _, info, panel = parse_extraction_response('{"biomarkers": [], "patientInfo": {"gender": "unknown"}}')
    assert info == {"name": None, "date_of_birth": None, "gender": None, "test_date": None}
    assert panel == "Lab Panel (0 biomarkers)"


@pytest.mark.parametrize("info", ['"Jane Doe"', '["Jane Doe"]'])
def test_non_object_patient_info_is_ignored(info):
    biomarkers, parsed, _ = parse_extraction_response(
        '{"biomarkers": [{"name": "TSH", "value": "2.1", "unit": "mIU/L"}], "patientInfo": ' + info + "}"
    )
    assert parsed == {"name": None, "date_of_birth": None, "gender": None, "test_date": None}
    assert len(biomarkers) == 1


def test_generate_panel_name():
    assert generate_panel_name([{"name": "TSH"}, {"name": "Ferritin"}]) == "Thyroid Panel + Iron Studies"


def test_api_key_validation(monkeypatch):
    assert validate_api_key("") == "API key is required"
    assert "sk-ant-" in validate_api_key("abc")
    assert validate_api_key("sk-ant-short") == "API key appears to be too short"
    assert validate_api_key("sk-ant-" + "x" * 40) is None

    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(ExtractionError):
        resolve_api_key(None)
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-server")
    assert resolve_api_key("") == "sk-ant-server"
    assert resolve_api_key("sk-ant-user") == "sk-ant-user"


def test_consolidate_agreeing_reports():
    info = {"name": "jane doe", "date_of_birth": "1980-05-01", "gender": "female", "test_date": "2024-03-01"}
    out = consolidate_patient_info([info, dict(info)])
    assert out["consolidated"]["name"] == "Jane Doe"
    assert out["discrepancies"] == []
    assert out["confidence"] == "high"


def test_consolidate_flags_discrepancies():
    out = consolidate_patient_info([
        {"name": "Jane Doe", "date_of_birth": "1980-05-01", "gender": "female", "test_date": "2024-01-01"},
        {"name": "Jane Doe", "date_of_birth": "1980-05-01", "gender": "female", "test_date": "2024-03-01"},
        {"name": "J. Doe", "date_of_birth": None, "gender": None, "test_date": None},
    ])
    assert out["consolidated"]["name"] == "Jane Doe"
    assert out["consolidated"]["test_date"] == "2024-03-01"
    assert len(out["discrepancies"]) == 2
    assert out["confidence"] == "medium"


def test_merge_prefers_most_recent_test_date():
    older = ExtractionResult("a.pdf", [{"name": "Ferritin", "value": "80", "unit": "µg/L"}],
                             {"test_date": "2024-01-01"}, "Iron Studies")
    newer = ExtractionResult("b.pdf", [{"name": "ferritin", "value": "95", "unit": "µg/L"},
                                       {"name": "TSH", "value": "2.0", "unit": "mIU/L"}],
                             {"test_date": "2024-03-01"}, "Iron Studies")
    merged = merge_biomarkers([newer, older])
    by_name = {b["name"].lower(): b for b in merged}
    assert by_name["ferritin"]["value"] == "95"
    assert by_name["ferritin"]["test_date"] == "2024-03-01"
    assert len(merged) == 2
