# labtrack/models/__init__.py
from labtrack.db.session import Base, engine

# Import model modules so SQLAlchemy registers all mappers.
# Important: we import the modules (not the classes) to avoid circular imports.
from . import user  # noqa: F401
from . import settings  # noqa: F401
from . import client  # noqa: F401
from . import analysis  # noqa: F401
from . import benchmark  # noqa: F401
from . import audit  # noqa: F401


def init_db() -> None:
    """Create tables if they don't exist (no-op without DATABASE_URL)."""
    if engine is None:
        return
    Base.metadata.create_all(bind=engine)
