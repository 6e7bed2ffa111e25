"""Model-backed conversion audit and copy generation.

Both entry points take a :class:`~convaudit.scraper.models.ScrapedPage`,
render it into a prompt, call the configured chat model and validate the
JSON it returns.  Without a configured model they return a built-in sample
so the rest of the stack stays usable in development.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from convaudit.analysis.errors import AnalysisError
from convaudit.analysis.json_parser import parse_ai_json
from convaudit.analysis.models import AuditReport, CopySuggestions
from convaudit.config import settings
from convaudit.scraper.models import ScrapedPage

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# LLM helper
# ---------------------------------------------------------------------------

def _get_llm() -> Any:
    """Return a configured LangChain chat model based on ``settings``."""
    if settings.llm_provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(model=settings.openai_chat_model, temperature=0)

    from langchain_ollama import ChatOllama

    return ChatOllama(
        model=settings.ollama_chat_model,
        base_url=settings.ollama_base_url,
        temperature=0,
        format="json",
    )


def _invoke(prompt: str) -> dict[str, Any]:
    """Send *prompt* to the model and parse its reply as a JSON object."""
    try:
        response = _get_llm().invoke(prompt)
    except Exception as exc:
        logger.error("[analyze] Model call failed: %s", exc)
        raise AnalysisError(f"Model call failed: {exc}") from exc
    raw = response.content if hasattr(response, "content") else str(response)
    return parse_ai_json(raw)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

_AUDIT_CATEGORIES = [
    "Traffic Match",
    "Above-the-Fold Clarity",
    "Unique Value Proposition",
    "CTA Engineering",
    "Friction Removal",
    "Social Proof & Trust",
    "Psychological Triggers",
    "Mobile Conversion",
    "Conversion Path Flow",
    "Data & Tracking",
    "AI & Automation",
]


def _page_context(page: ScrapedPage) -> str:
    return (
        f"URL: {page.url}\n"
        f"Title: {page.title}\n"
        f"H1 (Headline): {page.h1}\n"
        f"H2s (Subheaders): {', '.join(page.h2_list)}\n"
        f"Meta Description: {page.meta_description}\n"
        f"CTAs (Buttons found): {', '.join(page.cta_texts)}\n"
        f"Content Snippet: {page.main_text}\n"
    )


def build_audit_prompt(page: ScrapedPage) -> str:
    """Render the conversion-audit prompt for *page*."""
    categories = "\n".join(
        f"{i}. {name}" for i, name in enumerate(_AUDIT_CATEGORIES, start=1)
    )
    return (
        "You are a senior conversion-rate-optimisation strategist.\n"
        "Audit the landing page below for relevance, clarity, value and urgency, "
        "and for the distraction and anxiety that work against them.\n\n"
        f"{_page_context(page)}\n"
        "Identify the single biggest conversion killer, whether the offer passes "
        "a 5-second test, and how much cognitive load the page imposes.\n\n"
        f"Score every one of these categories:\n{categories}\n\n"
        "Be blunt and give concrete, implementable fixes.\n\n"
        "Reply with ONE JSON object and nothing else, shaped as:\n"
        "{\n"
        '  "score": number 0-10 with one decimal,\n'
        '  "summary": "one-sentence executive summary",\n'
        '  "audit_items": [{"category": "...", "status": "✅" | "⚠️" | "❌", '
        '"analysis": "...", "fix": "...", "why": "..."}],\n'
        '  "quick_wins": ["five", "highest", "priority", "quick", "wins"],\n'
        '  "roadmap_to_100": {"phase_1": {"title": "...", "tasks": ["..."]}, '
        '"phase_2": {...}, "phase_3": {...}},\n'
        '  "seo_analysis": {"score": number 0-10, "diagnosis": "...", '
        '"keywords": [{"term": "...", "intent": "Informational|Commercial|Transactional", '
        '"value": "High|Medium|Low"}], "fixes": ["..."]},\n'
        '  "competitor_analysis": [{"competitor": "...", '
        '"what_they_do_better": "...", "how_to_apply": "..."}]\n'
        "}\n"
    )


def build_copy_prompt(page: ScrapedPage) -> str:
    """Render the copy-rewrite prompt for *page*."""
    return (
        "You are a direct-response conversion copywriter.\n"
        "Rewrite the messaging of the page below: find the audience's core desire "
        "and the main point of friction in the current copy, then rework it with "
        "PAS, AIDA or benefit-first hooks.\n\n"
        f"URL: {page.url}\n"
        f"Current H1: {page.h1}\n"
        f"CTAs: {', '.join(page.cta_texts)}\n"
        f"Body Content: {page.main_text}\n\n"
        "Reply with ONE JSON object and nothing else, shaped as:\n"
        "{\n"
        '  "diagnosis": {"headline_weakness": "...", "cta_weakness": "..."},\n'
        '  "headlines": [{"option": "...", "tag": "..."}],\n'
        '  "subheadlines": ["...", "..."],\n'
        '  "ctas": {"primary": ["..."], "secondary": ["..."], "explanation": "..."},\n'
        '  "placement": "..."\n'
        "}\n"
    )


# ---------------------------------------------------------------------------
# Samples returned when no model is configured
# ---------------------------------------------------------------------------

_SAMPLE_REPORT: dict[str, Any] = {
    "score": 4.2,
    "summary": (
        "The page reads like a passive brochure rather than a conversion engine "
        "and leaks visitors at the consideration stage."
    ),
    "audit_items": [
        {
            "category": "Above-the-Fold Clarity",
            "status": "❌",
            "analysis": "The offer is not clear within five seconds.",
            "fix": "Replace the hero copy with an outcome-based benefit statement.",
            "why": "Clarity beats persuasion.",
        },
        {
            "category": "CTA Engineering",
            "status": "❌",
            "analysis": "Button labels describe effort, not value.",
            "fix": "Switch to value-driven labels such as 'Get My Free Report'.",
            "why": "Micro-copy drives macro results.",
        },
        {
            "category": "Social Proof & Trust",
            "status": "⚠️",
            "analysis": "No authority signals near the primary CTA.",
            "fix": "Add one testimonial with a headshot next to the hero.",
            "why": "Trust is a prerequisite for conversion.",
        },
    ],
    "quick_wins": [
        "Give the primary CTA a high-contrast colour.",
        "Remove navigation links from the landing page header.",
        "Add a money-back guarantee badge below the CTA.",
        "Lead the H1 with the number-one customer outcome.",
        "Place one strong testimonial near the hero.",
    ],
    "roadmap_to_100": {
        "phase_1": {
            "title": "Phase 1: Foundation",
            "tasks": ["Outcome-focused H1", "Visible trust signals", "Fix mobile tap targets"],
        },
        "phase_2": {
            "title": "Phase 2: Optimisation",
            "tasks": ["Rewrite sub-headers with PAS", "Apply the Rule of One", "Remove exit links"],
        },
        "phase_3": {
            "title": "Phase 3: Scaling",
            "tasks": ["Genuine urgency", "Behavioural tracking", "Per-source personalisation"],
        },
    },
    "seo_analysis": {
        "score": 4.8,
        "diagnosis": "Meta tags exist but target no high-intent terms.",
        "keywords": [
            {"term": "landing page audit", "intent": "Commercial", "value": "High"},
        ],
        "fixes": ["Put the primary keyword in the title tag."],
    },
    "competitor_analysis": [
        {
            "competitor": "Stripe",
            "what_they_do_better": "Clarity-first hero and value-driven CTAs.",
            "how_to_apply": "Cut the hero to one promise and one button.",
        },
    ],
}

_SAMPLE_COPY: dict[str, Any] = {
    "diagnosis": {
        "headline_weakness": "The headline lists features instead of outcomes.",
        "cta_weakness": "'Submit' implies work, not value.",
    },
    "headlines": [
        {"option": "Get More Leads Without Raising Ad Spend", "tag": "Outcome-focused"},
        {"option": "Turn Your Website Into a 24/7 Lead Machine", "tag": "Clarity-first"},
    ],
    "subheadlines": [
        "We audit your page and tell you exactly what to fix.",
        "No redesign, no guesswork: just the changes that move conversions.",
    ],
    "ctas": {
        "primary": ["Get My Free Conversion Audit", "Show Me the Fixes"],
        "secondary": ["See How It Works", "View a Sample Report"],
        "explanation": "Each label names the benefit the click delivers.",
    },
    "placement": "Headline above the fold; repeat the primary CTA before the footer.",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze_page(page: ScrapedPage) -> AuditReport:
    """Produce a full conversion audit for *page*.

    Raises:
        AnalysisError: If the model call fails or its output does not
            validate as an :class:`AuditReport`.
    """
    if not settings.llm_configured:
        logger.warning("[analyze] No chat model configured; returning sample report.")
        return AuditReport.model_validate(_SAMPLE_REPORT)

    logger.info("[analyze] Auditing %s …", page.url)
    data = _invoke(build_audit_prompt(page))
    try:
        return AuditReport.model_validate(data)
    except ValidationError as exc:
        logger.error("[analyze] Report for %s failed validation: %s", page.url, exc)
        raise AnalysisError(f"AI returned an invalid report: {exc}") from exc


def generate_copy(page: ScrapedPage) -> CopySuggestions:
    """Suggest rewritten headlines and CTAs for *page*.

    Raises:
        AnalysisError: If the model call fails or its output is invalid.
    """
    if not settings.llm_configured:
        logger.warning("[analyze] No chat model configured; returning sample copy.")
        return CopySuggestions.model_validate(_SAMPLE_COPY)

    logger.info("[analyze] Generating copy for %s …", page.url)
    data = _invoke(build_copy_prompt(page))
    try:
        return CopySuggestions.model_validate(data)
    except ValidationError as exc:
        logger.error("[analyze] Copy for %s failed validation: %s", page.url, exc)
        raise AnalysisError(f"AI returned invalid copy suggestions: {exc}") from exc
