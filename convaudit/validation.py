"""URL normalisation and validation for user-supplied audit targets."""

from __future__ import annotations

from urllib.parse import urlsplit

_SCHEMES = ("http://", "https://")
_MIN_LENGTH = 3


class InvalidUrl(ValueError):
    """Raised when a user-supplied URL cannot be turned into a fetchable URL."""


def normalize_url(url: str) -> str:
    """Return *url* with an ``http://`` or ``https://`` scheme.

    Inputs without a scheme get ``https://`` prepended.  An upper-case scheme
    (``HTTP://``) is lower-cased so the result always starts with one of the
    two canonical prefixes.

    Raises:
        InvalidUrl: If *url* is empty or only whitespace.
    """
    cleaned = (url or "").strip()
    if not cleaned:
        raise InvalidUrl("URL must not be empty")

    lowered = cleaned.lower()
    for scheme in _SCHEMES:
        if lowered.startswith(scheme):
            return scheme + cleaned[len(scheme):]
    return "https://" + cleaned


def validate_url(url: str) -> str:
    """Validate *url* and return its normalised form.

    Only the shape is checked: at least three characters, and a
    hostname once a scheme has been applied.  Whether the host exists is
    the fetcher's problem.

    Raises:
        InvalidUrl: If *url* is too short or has no hostname.
    """
    if not isinstance(url, str) or len(url.strip()) < _MIN_LENGTH:
        raise InvalidUrl("Invalid URL format")

    normalized = normalize_url(url)
    try:
        hostname = urlsplit(normalized).hostname
    except ValueError as exc:
        raise InvalidUrl("Invalid URL format") from exc
    if not hostname or any(ch.isspace() for ch in normalized):
        raise InvalidUrl("Invalid URL format")
    return normalized
