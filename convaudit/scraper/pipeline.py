"""Fetch → extract, the whole scraping pipeline behind one call."""

from __future__ import annotations

import logging

from convaudit.scraper.extractor import extract_page
from convaudit.scraper.fetcher import fetch_html
from convaudit.scraper.models import ExtractionLimits, FetchPolicy, ScrapedPage
from convaudit.validation import normalize_url

logger = logging.getLogger(__name__)


def scrape_page(
    url: str,
    policy: FetchPolicy | None = None,
    limits: ExtractionLimits | None = None,
) -> ScrapedPage:
    """Fetch *url* and extract its conversion signals.

    The returned record's ``url`` is the normalised request URL, so it always
    starts with ``http://`` or ``https://``.

    Raises:
        InvalidUrl: If *url* is empty.
        ScrapeError: Any classified fetch failure (see :mod:`convaudit.scraper.errors`).
    """
    target = normalize_url(url)
    logger.info("[scrape] Fetching %s …", target)
    html = fetch_html(target, policy=policy)
    page = extract_page(html, url=target, limits=limits)
    logger.info(
        "[scrape] %s: h2=%d cta=%d text=%d chars",
        target,
        len(page.h2_list),
        len(page.cta_texts),
        len(page.main_text),
    )
    return page
