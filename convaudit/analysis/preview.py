"""Heuristic preview analysis; no model call involved."""

from __future__ import annotations

from typing import List

from convaudit.analysis.models import Preview, PreviewIssue
from convaudit.scraper.models import ScrapedPage

MAX_PREVIEW_ISSUES = 3
_PENALTY = 20


def find_issues(page: ScrapedPage) -> List[PreviewIssue]:
    """Return the structural problems visible from the scraped record alone."""
    issues: List[PreviewIssue] = []
    if not page.h1:
        issues.append(
            PreviewIssue(
                category="Above-the-Fold Clarity",
                issue="Missing or weak H1 headline",
                impact="High",
            )
        )
    if not page.cta_texts:
        issues.append(
            PreviewIssue(
                category="CTA Engineering",
                issue="No clear call-to-action buttons found",
                impact="Critical",
            )
        )
    if not page.meta_description:
        issues.append(
            PreviewIssue(
                category="SEO & Trust",
                issue="Missing meta description",
                impact="Medium",
            )
        )
    return issues


def build_preview(page: ScrapedPage) -> Preview:
    """Score *page* out of 100, losing 20 points per issue found."""
    issues = find_issues(page)
    score = max(0, 100 - len(issues) * _PENALTY)
    return Preview(url=page.url, score=score, issues=issues[:MAX_PREVIEW_ISSUES])
