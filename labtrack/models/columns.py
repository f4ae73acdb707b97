"""Dialect-aware column types shared by the models."""
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.types import JSON as SA_JSON


def json_col_type():
    # Postgres gets JSONB, SQLite (tests) and others get generic JSON
    return SA_JSON().with_variant(PG_JSONB(), "postgresql")
