# Mark services as a package and expose the modules tests monkeypatch.

from . import documents as documents  # noqa: F401
from . import extraction as extraction  # noqa: F401

__all__ = [
    "documents",
    "extraction",
]
