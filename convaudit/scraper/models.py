"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from convaudit.config import settings


@dataclass(frozen=True)
class FetchPolicy:
    """Network limits applied to a single :func:`fetch_html` call."""

    timeout: float = 10.0
    max_retries: int = 2
    retry_delay: float = 1.0
    max_redirects: int = 5
    max_body_chars: int = 2_000_000
    user_agent: str = "Mozilla/5.0 (compatible; ConversionBot/1.0)"

    @classmethod
    def from_settings(cls) -> FetchPolicy:
        return cls(
            timeout=settings.fetch_timeout,
            max_retries=settings.fetch_max_retries,
            retry_delay=settings.fetch_retry_delay,
            max_redirects=settings.fetch_max_redirects,
            max_body_chars=settings.fetch_max_body_chars,
            user_agent=settings.user_agent,
        )


@dataclass(frozen=True)
class ExtractionLimits:
    """Upper bounds on the size of a :class:`ScrapedPage`."""

    max_h2: int = 5
    max_ctas: int = 10
    max_main_text: int = 3000

    @classmethod
    def from_settings(cls) -> ExtractionLimits:
        return cls(
            max_h2=settings.max_h2,
            max_ctas=settings.max_ctas,
            max_main_text=settings.max_main_text,
        )


@dataclass(frozen=True)
class ScrapedPage:
    """Conversion signals extracted from one page.

    Every string field uses ``""`` for "absent"; the list fields are tuples so
    the record stays immutable once built.
    """

    url: str = ""
    title: str = ""
    h1: str = ""
    h2_list: Tuple[str, ...] = ()
    meta_description: str = ""
    cta_texts: Tuple[str, ...] = ()
    main_text: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape consumed by the analyzer and the API."""
        return {
            "url": self.url,
            "title": self.title,
            "h1": self.h1,
            "h2s": list(self.h2_list),
            "metaDescription": self.meta_description,
            "ctaButtons": list(self.cta_texts),
            "mainText": self.main_text,
        }
