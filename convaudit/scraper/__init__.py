"""Scraper package: web fetch & conversion-signal extraction."""

from convaudit.scraper.errors import FetchTimeout, ScrapeError, ScrapeFailed, UnreachableHost
from convaudit.scraper.extractor import extract_page
from convaudit.scraper.fetcher import fetch_html
from convaudit.scraper.models import ExtractionLimits, FetchPolicy, ScrapedPage
from convaudit.scraper.pipeline import scrape_page

__all__ = [
    "fetch_html",
    "extract_page",
    "scrape_page",
    "ScrapedPage",
    "FetchPolicy",
    "ExtractionLimits",
    "ScrapeError",
    "UnreachableHost",
    "FetchTimeout",
    "ScrapeFailed",
]
