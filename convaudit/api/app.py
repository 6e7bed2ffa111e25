"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under their respective path prefix:

    /audit     scrape, preview, full report and copy generation
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from convaudit import __version__
from convaudit.api.routers import audit as audit_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="convaudit API",
        description=(
            "Landing-page conversion audits: scrape a URL into a bounded "
            "signal record, get a heuristic preview, or request a full "
            "model-backed report and rewritten copy."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(audit_router.router, prefix="/audit", tags=["audit"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn convaudit.api.app:app --reload
app = create_app()
