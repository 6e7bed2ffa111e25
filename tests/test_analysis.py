"""Tests for preview heuristics, model-output parsing and the analyzer.

LLM calls: ``convaudit.analysis.analyzer._get_llm`` is patched to return a
``MagicMock`` whose ``invoke`` yields canned content.  No model is contacted.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from convaudit.analysis.analyzer import (
    analyze_page,
    build_audit_prompt,
    build_copy_prompt,
    generate_copy,
)
from convaudit.analysis.errors import AnalysisError
from convaudit.analysis.json_parser import parse_ai_json
from convaudit.analysis.models import AuditReport, CopySuggestions
from convaudit.analysis.preview import build_preview
from convaudit.scraper.models import ScrapedPage


_PAGE = ScrapedPage(
    url="https://acme.example.com",
    title="Acme Analytics",
    h1="Know your numbers",
    h2_list=("Fast setup", "Loved by teams"),
    meta_description="Dashboards your team will actually use.",
    cta_texts=("Start free trial", "Book a demo"),
    main_text="Acme turns raw events into answers.",
)

_REPORT = {
    "score": 6.5,
    "summary": "Clear offer, weak proof.",
    "audit_items": [
        {
            "category": "Social Proof & Trust",
            "status": "❌",
            "analysis": "No testimonials.",
            "fix": "Add two customer quotes.",
            "why": "Trust precedes action.",
        }
    ],
    "quick_wins": ["Add logos"],
    "roadmap_to_100": {"phase_1": {"title": "Foundation", "tasks": ["Logos"]}},
    "seo_analysis": {"score": 5, "diagnosis": "Thin.", "keywords": [], "fixes": []},
    "competitor_analysis": [],
}

_COPY = {
    "diagnosis": {"headline_weakness": "Vague.", "cta_weakness": "Passive."},
    "headlines": [{"option": "See every metric in one place", "tag": "Clarity"}],
    "subheadlines": ["Set up in five minutes."],
    "ctas": {"primary": ["Start my trial"], "secondary": ["Watch demo"], "explanation": "Benefit-led."},
    "placement": "Above the fold.",
}


def _llm_returning(content: str) -> MagicMock:
    llm = MagicMock()
    llm.invoke.return_value = MagicMock(content=content)
    return llm


@pytest.fixture
def configured_llm(monkeypatch):
    monkeypatch.setattr("convaudit.analysis.analyzer.settings.llm_provider", "ollama")


@pytest.fixture
def no_llm(monkeypatch):
    monkeypatch.setattr("convaudit.analysis.analyzer.settings.llm_provider", "none")


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

class TestBuildPreview:
    def test_complete_page_scores_100(self) -> None:
        preview = build_preview(_PAGE)
        assert preview.score == 100
        assert preview.issues == []
        assert preview.url == "https://acme.example.com"

    def test_empty_page_loses_20_per_issue(self) -> None:
        preview = build_preview(ScrapedPage(url="https://blank.example.com"))
        assert preview.score == 40
        assert [i.category for i in preview.issues] == [
            "Above-the-Fold Clarity",
            "CTA Engineering",
            "SEO & Trust",
        ]
        assert [i.impact for i in preview.issues] == ["High", "Critical", "Medium"]

    def test_missing_ctas_only(self) -> None:
        page = ScrapedPage(url="https://x.example.com", h1="Hi", meta_description="D")
        preview = build_preview(page)
        assert preview.score == 80
        assert preview.issues[0].issue == "No clear call-to-action buttons found"


# ---------------------------------------------------------------------------
# JSON parsing
# ---------------------------------------------------------------------------

class TestParseAiJson:
    def test_plain_json(self) -> None:
        assert parse_ai_json('{"score": 5}') == {"score": 5}

    def test_fenced_json(self) -> None:
        content = 'Here you go:\n```json\n{"score": 5, "summary": "ok"}\n```\nThanks!'
        assert parse_ai_json(content) == {"score": 5, "summary": "ok"}

    def test_bare_fence(self) -> None:
        assert parse_ai_json('```\n{"a": 1}\n```') == {"a": 1}

    def test_chatter_around_object(self) -> None:
        assert parse_ai_json('Sure! {"a": {"b": 2}} Hope that helps.') == {"a": {"b": 2}}

    def test_control_characters_removed(self) -> None:
        content = 'noise {"summary": "line\u0007one"} noise'
        assert parse_ai_json(content) == {"summary": "lineone"}

    @pytest.mark.parametrize("content", ["", "no json here", "[1, 2, 3]", "{broken"])
    def test_invalid_raises_analysis_error(self, content: str) -> None:
        with pytest.raises(AnalysisError, match="invalid JSON"):
            parse_ai_json(content)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

class TestPrompts:
    def test_audit_prompt_includes_signals(self) -> None:
        prompt = build_audit_prompt(_PAGE)
        assert "URL: https://acme.example.com" in prompt
        assert "H1 (Headline): Know your numbers" in prompt
        assert "Fast setup, Loved by teams" in prompt
        assert "Start free trial, Book a demo" in prompt
        assert "Traffic Match" in prompt
        assert "AI & Automation" in prompt

    def test_copy_prompt_includes_signals(self) -> None:
        prompt = build_copy_prompt(_PAGE)
        assert "Current H1: Know your numbers" in prompt
        assert "Acme turns raw events into answers." in prompt

    def test_prompts_carry_the_full_bounded_main_text(self) -> None:
        text = "w" * 2999 + "!"
        page = ScrapedPage(url="https://acme.example.com", main_text=text)
        assert f"Content Snippet: {text}\n" in build_audit_prompt(page)
        assert f"Body Content: {text}\n" in build_copy_prompt(page)


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class TestAnalyzePage:
    def test_returns_validated_report(self, configured_llm) -> None:
        llm = _llm_returning(json.dumps(_REPORT))
        with patch("convaudit.analysis.analyzer._get_llm", return_value=llm):
            report = analyze_page(_PAGE)

        assert isinstance(report, AuditReport)
        assert report.score == 6.5
        assert report.audit_items[0].category == "Social Proof & Trust"
        assert report.roadmap_to_100["phase_1"].tasks == ["Logos"]
        prompt = llm.invoke.call_args[0][0]
        assert "Know your numbers" in prompt

    def test_fenced_output_is_accepted(self, configured_llm) -> None:
        llm = _llm_returning("```json\n" + json.dumps(_REPORT) + "\n```")
        with patch("convaudit.analysis.analyzer._get_llm", return_value=llm):
            report = analyze_page(_PAGE)
        assert report.summary == "Clear offer, weak proof."

    def test_unparseable_output_raises(self, configured_llm) -> None:
        llm = _llm_returning("I cannot help with that.")
        with patch("convaudit.analysis.analyzer._get_llm", return_value=llm):
            with pytest.raises(AnalysisError):
                analyze_page(_PAGE)

    def test_out_of_range_score_raises(self, configured_llm) -> None:
        bad = dict(_REPORT, score=42)
        llm = _llm_returning(json.dumps(bad))
        with patch("convaudit.analysis.analyzer._get_llm", return_value=llm):
            with pytest.raises(AnalysisError, match="invalid report"):
                analyze_page(_PAGE)

    def test_model_failure_raises(self, configured_llm) -> None:
        llm = MagicMock()
        llm.invoke.side_effect = ConnectionError("model offline")
        with patch("convaudit.analysis.analyzer._get_llm", return_value=llm):
            with pytest.raises(AnalysisError, match="model offline"):
                analyze_page(_PAGE)

    def test_sample_report_without_model(self, no_llm) -> None:
        with patch("convaudit.analysis.analyzer._get_llm") as mock_get_llm:
            report = analyze_page(_PAGE)

        mock_get_llm.assert_not_called()
        assert 0 <= report.score <= 10
        assert report.audit_items
        assert len(report.quick_wins) == 5

    def test_openai_without_key_uses_sample(self, monkeypatch) -> None:
        monkeypatch.setattr("convaudit.analysis.analyzer.settings.llm_provider", "openai")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with patch("convaudit.analysis.analyzer._get_llm") as mock_get_llm:
            analyze_page(_PAGE)
        mock_get_llm.assert_not_called()


class TestGenerateCopy:
    def test_returns_validated_copy(self, configured_llm) -> None:
        llm = _llm_returning(json.dumps(_COPY))
        with patch("convaudit.analysis.analyzer._get_llm", return_value=llm):
            copy = generate_copy(_PAGE)

        assert isinstance(copy, CopySuggestions)
        assert copy.headlines[0].option == "See every metric in one place"
        assert copy.ctas.primary == ["Start my trial"]

    def test_invalid_shape_raises(self, configured_llm) -> None:
        llm = _llm_returning(json.dumps({"headlines": "not a list"}))
        with patch("convaudit.analysis.analyzer._get_llm", return_value=llm):
            with pytest.raises(AnalysisError):
                generate_copy(_PAGE)

    def test_sample_copy_without_model(self, no_llm) -> None:
        copy = generate_copy(_PAGE)
        assert copy.headlines
        assert copy.ctas.primary
