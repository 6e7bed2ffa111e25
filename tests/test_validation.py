"""Tests for URL normalisation and validation."""

from __future__ import annotations

import pytest

from convaudit.validation import InvalidUrl, normalize_url, validate_url


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("example.com", "https://example.com"),
            ("www.example.com/pricing?x=1", "https://www.example.com/pricing?x=1"),
            ("  example.com  ", "https://example.com"),
            ("http://example.com", "http://example.com"),
            ("https://example.com/a", "https://example.com/a"),
            ("HTTPS://Example.com/A", "https://Example.com/A"),
        ],
    )
    def test_normalises_scheme(self, raw: str, expected: str) -> None:
        assert normalize_url(raw) == expected

    def test_host_starting_with_http_still_gets_scheme(self) -> None:
        assert normalize_url("httpbin.org/get") == "https://httpbin.org/get"

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty_input_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidUrl):
            normalize_url(raw)


class TestValidateUrl:
    def test_returns_normalised_url(self) -> None:
        assert validate_url("example.com") == "https://example.com"

    @pytest.mark.parametrize("raw", ["", "ab", "http://", "https:///path", "exa mple.com"])
    def test_rejects_invalid(self, raw: str) -> None:
        with pytest.raises(InvalidUrl, match="Invalid URL format"):
            validate_url(raw)

    def test_invalid_url_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_url("x")
