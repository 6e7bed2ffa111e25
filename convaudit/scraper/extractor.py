"""Signal extraction: turns raw markup into a :class:`ScrapedPage`.

Extraction is best-effort and never raises.  A missing element yields the
field's empty default; markup the parser cannot cope with at all yields an
empty record.
"""

from __future__ import annotations

import logging
import re
from typing import List

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from convaudit.scraper.models import ExtractionLimits, ScrapedPage

logger = logging.getLogger(__name__)

_NOISE_TAGS = ["script", "style", "noscript", "iframe"]
_NOISE_SELECTOR = ".ad, .advertisement"
_CTA_SELECTOR = "button, a.btn, a.button, input[type='submit']"
_WHITESPACE = re.compile(r"\s+")
_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "button", "dd", "div",
    "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form", "h1",
    "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav", "ol",
    "option", "p", "pre", "section", "table", "td", "th", "tr", "ul",
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _text(tag: Tag | None) -> str:
    """Return the trimmed text of *tag*, or empty string when it is ``None``."""
    if tag is None:
        return ""
    return tag.get_text().strip()


def _strip_noise(soup: BeautifulSoup) -> None:
    """Remove elements whose content is never visible or never relevant."""
    for tag in soup(_NOISE_TAGS):
        tag.extract()
    for tag in soup.select(_NOISE_SELECTOR):
        tag.extract()


def _extract_meta_description(soup: BeautifulSoup) -> str:
    meta = soup.find("meta", attrs={"name": "description"})
    if meta is None:
        return ""
    content = meta.get("content")
    if isinstance(content, list):
        content = " ".join(content)
    return (content or "").strip()


def _extract_h2_list(soup: BeautifulSoup, limit: int) -> List[str]:
    headings: List[str] = []
    for tag in soup.find_all("h2"):
        if len(headings) >= limit:
            break
        text = _text(tag)
        if text:
            headings.append(text)
    return headings


def _cta_text(tag: Tag) -> str:
    """Submit inputs carry their label in ``value``; everything else in its text."""
    if tag.name == "input":
        value = tag.get("value")
        return value.strip() if isinstance(value, str) else ""
    return _text(tag)


def _extract_cta_texts(soup: BeautifulSoup, limit: int) -> List[str]:
    ctas: List[str] = []
    for tag in soup.select(_CTA_SELECTOR):
        if len(ctas) >= limit:
            break
        text = _cta_text(tag)
        if text:
            ctas.append(text)
    return ctas


def _mark_block_boundaries(container: BeautifulSoup | Tag) -> None:
    """Pad block-level elements with spaces so their text cannot run together.

    Inline elements (``<strong>``, ``<a>``, ``<span>`` ...) get no padding, so
    ``Sign<strong>up</strong>`` still reads ``Signup``.
    """
    for tag in container.find_all(_BLOCK_TAGS):
        tag.insert_before(" ")
        tag.insert_after(" ")


def _extract_main_text(soup: BeautifulSoup, limit: int) -> str:
    """Collapse the visible body text and cut it to *limit* characters.

    ``html.parser`` does not invent a ``<body>`` for fragments, so without one
    the whole document is used minus the ``<head>``/``<title>`` content.
    """
    container = soup.body
    if container is None:
        for tag in soup(["head", "title"]):
            tag.extract()
        container = soup
    _mark_block_boundaries(container)
    text = container.get_text()
    return _WHITESPACE.sub(" ", text).strip()[:limit]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_page(
    html: str,
    url: str = "",
    limits: ExtractionLimits | None = None,
) -> ScrapedPage:
    """Extract conversion signals from *html*.

    Noise (scripts, styles, iframes, ad blocks) is stripped before any text is
    read, so none of it can leak into the headings, CTAs or main text.

    Args:
        html: Raw markup; may be empty, partial or badly malformed.
        url: The URL the markup was fetched from, copied onto the record.
        limits: Size bounds; defaults to the configured limits.

    Returns:
        A fully populated :class:`ScrapedPage`.
    """
    limits = limits or ExtractionLimits.from_settings()

    try:
        soup = BeautifulSoup(html or "", "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("[extract] Parser rejected markup from %s: %s", url or "<input>", exc)
        return ScrapedPage(url=url)

    _strip_noise(soup)

    title = _text(soup.find("title"))
    meta_description = _extract_meta_description(soup)
    h1 = _text(soup.find("h1"))
    h2_list = _extract_h2_list(soup, limits.max_h2)
    cta_texts = _extract_cta_texts(soup, limits.max_ctas)
    main_text = _extract_main_text(soup, limits.max_main_text)

    return ScrapedPage(
        url=url,
        title=title,
        h1=h1,
        h2_list=tuple(h2_list),
        meta_description=meta_description,
        cta_texts=tuple(cta_texts),
        main_text=main_text,
    )
