from types import SimpleNamespace

from sqlalchemy import event, text
from sqlalchemy.orm import Session

from labtrack.db.session import _apply_row_owner, bind_row_owner


class _RecordingConnection:
    def __init__(self, dialect):
        self.dialect = SimpleNamespace(name=dialect)
        self.statements = []

    def execute(self, statement, params=None):
        self.statements.append((str(statement), params))


def test_owner_is_set_transaction_local_on_postgres():
    conn = _RecordingConnection("postgresql")
    _apply_row_owner(SimpleNamespace(info={"row_owner": "user-1"}), None, conn)
    [(sql, params)] = conn.statements
    assert "set_config('app.current_user_id', :uid, true)" in sql
    assert params == {"uid": "user-1"}


def test_owner_not_set_when_unbound_or_not_postgres():
    pg = _RecordingConnection("postgresql")
    _apply_row_owner(SimpleNamespace(info={}), None, pg)
    lite = _RecordingConnection("sqlite")
    _apply_row_owner(SimpleNamespace(info={"row_owner": "user-1"}), None, lite)
    assert pg.statements == [] and lite.statements == []


def test_owner_reapplied_on_every_transaction():
    assert event.contains(Session, "after_begin", _apply_row_owner)


def test_bound_owner_survives_commit(db):
    db.execute(text("SELECT 1"))
    bind_row_owner(db, "user-1")
    db.commit()
    db.execute(text("SELECT 1"))
    assert db.info["row_owner"] == "user-1"
