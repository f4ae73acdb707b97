from datetime import date
from types import SimpleNamespace

import pytest

from labtrack.services.client_matcher import (
    ClientMatchError,
    PatientInfo,
    match_client,
    name_similarity,
    new_client_fields,
    score_client,
)


def _client(cid, name, dob=None, gender=None):
    return SimpleNamespace(id=cid, full_name=name, date_of_birth=dob, gender=gender)


def test_name_similarity_ignores_order_and_punctuation():
    assert name_similarity("Doe, Jane", "jane doe") == 1.0
    assert name_similarity("", "") == 1.0
    assert name_similarity("Jane Doe", "Zed Q") < 0.5


def test_exact_name_and_dob_is_high_confidence():
    jane = _client("c1", "Jane Doe", date(1980, 5, 1), "female")
    info = PatientInfo(name="Jane Doe", date_of_birth="1980-05-01", gender="female")
    result = match_client(info, [jane])
    assert result.matched is True
    assert result.client is jane
    assert result.confidence == "high"
    assert result.needs_confirmation is False
    assert result.suggested_action == "use-existing"
    assert result.score == 1.0


def test_similar_name_without_dob_is_medium_and_needs_confirmation():
    # one letter off in an 8-letter normalised name -> 2 of 3 name points
    client = _client("c1", "Jane Dow")
    result = match_client(PatientInfo(name="Jane Doe"), [client])
    assert result.confidence == "medium"
    assert result.needs_confirmation is True
    assert result.suggested_action == "use-existing"
    assert result.to_dict()["client_id"] == "c1"


def test_dob_mismatch_drops_below_threshold():
    client = _client("c1", "Jane Doe", date(1975, 1, 1))
    info = PatientInfo(name="Jane Doe", date_of_birth="1980-05-01")
    assert score_client(client, info) == pytest.approx(0.5)
    result = match_client(info, [client])
    assert result.matched is False
    assert result.suggested_action == "create-new"
    assert result.confidence == "high"
    assert result.needs_confirmation is True


def test_no_clients_suggests_create_new():
    result = match_client(PatientInfo(name="John Smith"), [])
    assert result.matched is False
    assert result.client is None
    assert result.suggested_action == "create-new"


def test_missing_name_and_dob_needs_manual_selection():
    result = match_client(PatientInfo(gender="male"), [_client("c1", "John Smith")])
    assert result.confidence == "low"
    assert result.suggested_action == "manual-select"
    assert result.needs_confirmation is True


def test_tie_keeps_first_client():
    first = _client("c1", "Jane Doe")
    second = _client("c2", "Jane Doe")
    result = match_client(PatientInfo(name="Jane Doe"), [first, second])
    assert result.client is first


def test_gender_only_counts_when_both_known():
    client = _client("c1", "Jane Doe", gender=None)
    assert score_client(client, PatientInfo(name="Jane Doe", gender="female")) == 1.0
    client.gender = "male"
    assert score_client(client, PatientInfo(name="Jane Doe", gender="female")) == pytest.approx(0.75)


def test_new_client_fields_requires_name():
    with pytest.raises(ClientMatchError):
        new_client_fields(PatientInfo(date_of_birth="1980-05-01"))
    fields = new_client_fields(PatientInfo(name="Jane Doe", gender="female"))
    assert fields["full_name"] == "Jane Doe"
    assert fields["status"] == "active"
    assert fields["notes"] == "Auto-created from lab report"
