from datetime import date

from labtrack.models.analysis import Analysis
from labtrack.models.client import Client
from labtrack.models.settings import Settings
from labtrack.models.user import User


def test_user_insert_creates_settings_row(db):
    user = User(email="a@example.com", hashed_password="x")
    db.add(user)
    db.commit()
    settings = db.query(Settings).filter(Settings.user_id == user.id).one()
    assert settings.preferences == {}
    assert settings.api_key is None


def test_analysis_results_round_trip_encrypted(db):
    client = Client(user_id="user-1", full_name="Jane Doe", status="active", tags=[])
    db.add(client)
    db.commit()
    rows = [{"biomarker_name": "Ferritin", "value": "80", "unit": "µg/L"}]
    analysis = Analysis(user_id="user-1", client_id=client.id, lab_test_date=date(2024, 1, 1), results=rows)
    db.add(analysis)
    db.commit()
    db.expire_all()

    loaded = db.get(Analysis, analysis.id)
    assert loaded.results == rows
    assert loaded.client.full_name == "Jane Doe"
    assert [a.id for a in loaded.client.analyses] == [analysis.id]


def test_client_delete_cascades_to_analyses(db):
    client = Client(user_id="user-1", full_name="Jane Doe", status="active", tags=[])
    client.analyses.append(Analysis(user_id="user-1", results=[]))
    db.add(client)
    db.commit()
    db.delete(client)
    db.commit()
    assert db.query(Analysis).count() == 0
