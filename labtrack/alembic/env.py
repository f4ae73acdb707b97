import os
from logging.config import fileConfig
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool
from alembic import context

PACKAGE_DIR = Path(__file__).resolve().parents[1]
ENV_PATH = PACKAGE_DIR / ".env"
load_dotenv(ENV_PATH)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Grab models metadata
from labtrack.db.session import DATABASE_URL, Base  # noqa: E402
from labtrack.models import user, settings, client, analysis, benchmark  # noqa: F401, E402

target_metadata = Base.metadata


def _current_db_url() -> str:
    env_url = os.getenv("DATABASE_URL")
    url = env_url if env_url else DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL is not set; cannot run migrations.")
    return url


def run_migrations_offline():
    url = _current_db_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    config_section = config.get_section(config.config_ini_section) or {}
    config_section["sqlalchemy.url"] = _current_db_url()

    connectable = engine_from_config(
        config_section,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
