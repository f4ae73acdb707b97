import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure tests use an in-memory SQLite DB
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENCRYPTION_SECRET", "test-encryption-secret")

# Ensure the project root is on sys.path so `import labtrack` works when running
# pytest from the repository root.
ROOT_DIR = Path(__file__).resolve().parents[2]  # repository root
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from labtrack.app import app
from labtrack.db.session import Base, get_db
from labtrack.auth.deps import get_current_user
from labtrack.utils.rate_limit import limiter

TEST_USER_ID = "user-1"
VALID_API_KEY = "sk-ant-api03-" + "x" * 40

# In-memory SQLite shared across connections
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def create_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def _override_current_user():
    return SimpleNamespace(id=TEST_USER_ID, email="u@example.com")


app.dependency_overrides[get_db] = _override_get_db
app.dependency_overrides[get_current_user] = _override_current_user

# Code paths that read SessionLocal/engine directly use the test engine/session
import labtrack.db.session as session_mod
session_mod.engine = engine
session_mod.SessionLocal = TestingSessionLocal
import labtrack.models as models_mod
models_mod.engine = engine


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    # ensure limiter state fresh each test
    limiter.reset()
    yield


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    import labtrack.services.storage as storage
    monkeypatch.setattr(storage, "DEFAULT_UPLOAD_DIR", tmp_path / "uploads")
    return tmp_path / "uploads"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def real_auth():
    """Use the real bearer-token dependency instead of the fixed test user."""
    app.dependency_overrides.pop(get_current_user, None)
    yield
    app.dependency_overrides[get_current_user] = _override_current_user


@pytest.fixture
def fake_extraction(monkeypatch):
    """Replace the Claude call with a canned reply per file."""
    from labtrack.services.extraction import ExtractionResult, generate_panel_name

    calls = []
    replies = {}

    def _fake(api_key, doc):
        calls.append(doc.filename)
        biomarkers, patient_info = replies.get(doc.filename) or replies["*"]
        return ExtractionResult(
            filename=doc.filename,
            biomarkers=[dict(b) for b in biomarkers],
            patient_info=dict(patient_info),
            panel_name=generate_panel_name(biomarkers),
        )

    monkeypatch.setattr("labtrack.services.report_pipeline.extract_biomarkers", _fake)
    monkeypatch.setenv("ANTHROPIC_API_KEY", VALID_API_KEY)
    return SimpleNamespace(calls=calls, replies=replies)
