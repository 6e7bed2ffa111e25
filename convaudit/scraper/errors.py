"""Classified fetch failures.

Extraction never fails, so every error here comes from the fetch stage.
Callers map them to user-facing responses: an unreachable host is the
target URL's fault, a timeout is the target site's.
"""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for fetch-stage failures.

    Attributes:
        url: The normalised URL that was being fetched.
        reason: The underlying, human-readable failure message.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to scrape {url}: {reason}")


class UnreachableHost(ScrapeError):
    """DNS resolution failed or the connection was refused."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        super().__init__(
            url, reason or "Website not found or unreachable. Please check the URL."
        )


class FetchTimeout(ScrapeError):
    """Every attempt timed out."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        super().__init__(
            url,
            reason or "Connection timed out. The website took too long to respond.",
        )


class ScrapeFailed(ScrapeError):
    """Any other fetch failure: non-2xx status, TLS error, redirect loop, …"""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(url, reason)
