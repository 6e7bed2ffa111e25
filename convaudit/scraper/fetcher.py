"""HTTP fetcher with bounded retry on timeouts."""

from __future__ import annotations

import logging
import ssl
import time

import httpx

from convaudit.scraper.errors import FetchTimeout, ScrapeFailed, UnreachableHost
from convaudit.scraper.models import FetchPolicy
from convaudit.validation import normalize_url

logger = logging.getLogger(__name__)


def _is_tls_error(exc: BaseException) -> bool:
    """Return ``True`` if *exc* (or anything it was raised from) is an SSL failure.

    httpx reports handshake and certificate problems as ``ConnectError``, the
    same class it uses for DNS failures, so the cause chain decides.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLError):
            return True
        current = current.__cause__ or current.__context__
    message = str(exc)
    return "[SSL" in message or "CERTIFICATE_VERIFY_FAILED" in message


def _read_once(client: httpx.Client, url: str, policy: FetchPolicy) -> str:
    """Run one GET attempt, reading the body within ``policy.timeout`` overall.

    httpx applies its timeout to each network operation separately, so a
    server that trickles bytes never trips it.  The body is streamed and the
    attempt fails with ``httpx.ReadTimeout`` once the deadline has passed.
    Bodies longer than ``policy.max_body_chars`` are truncated.
    """
    deadline = time.monotonic() + policy.timeout
    with client.stream("GET", url) as response:
        response.raise_for_status()
        chunks: list[str] = []
        size = 0
        for chunk in response.iter_text():
            if time.monotonic() > deadline:
                raise httpx.ReadTimeout(
                    f"Response body not received within {policy.timeout}s",
                    request=response.request,
                )
            chunks.append(chunk)
            size += len(chunk)
            if size > policy.max_body_chars:
                logger.warning(
                    "[fetch] %s body exceeds %d chars, truncating",
                    url,
                    policy.max_body_chars,
                )
                break
    return "".join(chunks)[: policy.max_body_chars]


def _get(client: httpx.Client, url: str, policy: FetchPolicy) -> str:
    """Issue GETs until one succeeds, retrying only on timeouts."""
    attempt = 0
    while True:
        attempt += 1
        try:
            return _read_once(client, url, policy)
        except httpx.TimeoutException as exc:
            if attempt > policy.max_retries:
                logger.error("[fetch] %s timed out after %d attempt(s)", url, attempt)
                raise FetchTimeout(url) from exc
            logger.warning(
                "[fetch] Timeout on %s, retrying (%d/%d) …",
                url,
                attempt,
                policy.max_retries,
            )
            time.sleep(policy.retry_delay)


def fetch_html(url: str, policy: FetchPolicy | None = None) -> str:
    """Fetch *url* and return the response body as text.

    The URL is normalised first (``https://`` is assumed when no scheme is
    given).  Redirects are followed up to ``policy.max_redirects`` hops, and
    each attempt, body included, must finish within ``policy.timeout``.

    Raises:
        InvalidUrl: If *url* is empty.
        UnreachableHost: On DNS failure or refused connection.
        FetchTimeout: When every attempt timed out.
        ScrapeFailed: For any other failure, including non-2xx responses.
    """
    policy = policy or FetchPolicy.from_settings()
    target = normalize_url(url)

    try:
        with httpx.Client(
            headers={"User-Agent": policy.user_agent},
            timeout=policy.timeout,
            follow_redirects=True,
            max_redirects=policy.max_redirects,
        ) as client:
            return _get(client, target, policy)
    except FetchTimeout:
        raise
    except httpx.ConnectError as exc:
        if _is_tls_error(exc):
            logger.error("[fetch] TLS failure for %s: %s", target, exc)
            raise ScrapeFailed(target, str(exc)) from exc
        logger.error("[fetch] %s is unreachable: %s", target, exc)
        raise UnreachableHost(target) from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.error("[fetch] %s returned HTTP %d", target, status)
        raise ScrapeFailed(
            target, f"Request failed with status code {status}", status_code=status
        ) from exc
    except Exception as exc:
        logger.error("[fetch] Unexpected failure for %s: %s", target, exc)
        raise ScrapeFailed(target, str(exc) or exc.__class__.__name__) from exc
