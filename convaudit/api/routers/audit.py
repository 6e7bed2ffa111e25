"""Audit endpoints.

Routes
------
POST /audit/scrape     Body: {"url": "example.com"}  → scraped signal record
POST /audit/preview    Body: {"url": "example.com"}  → heuristic preview
POST /audit/report     Body: {"url": "example.com"}  → {"page", "report"}: record + full audit
POST /audit/copy       Body: {"url": "example.com"}  → {"page", "copy"}: record + rewritten copy

The URL scheme is optional; ``https://`` is assumed.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from convaudit.analysis import AnalysisError, analyze_page, build_preview, generate_copy
from convaudit.scraper import (
    FetchTimeout,
    ScrapedPage,
    ScrapeError,
    UnreachableHost,
    scrape_page,
)
from convaudit.validation import InvalidUrl, validate_url

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AuditRequest(BaseModel):
    url: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status_for(exc: ScrapeError) -> int:
    if isinstance(exc, UnreachableHost):
        return 422
    if isinstance(exc, FetchTimeout):
        return 504
    return 502


def _scrape(url: str) -> ScrapedPage:
    """Validate and scrape *url*, translating failures into HTTP errors."""
    try:
        target = validate_url(url)
    except InvalidUrl as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        return scrape_page(target)
    except ScrapeError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/scrape")
def scrape_endpoint(body: AuditRequest) -> dict[str, Any]:
    """Return the extracted signal record for a URL."""
    return _scrape(body.url).to_dict()


@router.post("/preview")
def preview_endpoint(body: AuditRequest) -> dict[str, Any]:
    """Scrape a URL and return the model-free preview verdict."""
    page = _scrape(body.url)
    preview = build_preview(page)
    return {"success": True, "preview": preview.model_dump()}


@router.post("/report")
def report_endpoint(body: AuditRequest) -> dict[str, Any]:
    """Scrape a URL and run the full conversion audit on it."""
    page = _scrape(body.url)
    try:
        report = analyze_page(page)
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=f"Analysis failed: {exc}") from exc
    return {"page": page.to_dict(), "report": report.model_dump()}


@router.post("/copy")
def copy_endpoint(body: AuditRequest) -> dict[str, Any]:
    """Scrape a URL and suggest rewritten headline and CTA copy."""
    page = _scrape(body.url)
    try:
        suggestions = generate_copy(page)
    except AnalysisError as exc:
        raise HTTPException(
            status_code=502, detail=f"Copy generation failed: {exc}"
        ) from exc
    return {"page": page.to_dict(), "copy": suggestions.model_dump()}
