"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from convaudit.api import app

    uvicorn convaudit.api:app --reload
"""

from convaudit.api.app import app

__all__ = ["app"]
