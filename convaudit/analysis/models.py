"""Pydantic schemas for analysis results.

Model output is validated against these before it leaves the analyzer, so
the API never forwards a half-formed report.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AuditItem(BaseModel):
    category: str
    status: str = ""
    analysis: str = ""
    fix: str = ""
    why: str = ""


class RoadmapPhase(BaseModel):
    title: str
    tasks: List[str] = Field(default_factory=list)


class Keyword(BaseModel):
    term: str
    intent: str = ""
    value: str = ""


class SeoAnalysis(BaseModel):
    score: float = Field(ge=0, le=10)
    diagnosis: str = ""
    keywords: List[Keyword] = Field(default_factory=list)
    fixes: List[str] = Field(default_factory=list)


class CompetitorInsight(BaseModel):
    competitor: str
    what_they_do_better: str = ""
    how_to_apply: str = ""


class AuditReport(BaseModel):
    """Full conversion audit for one page."""

    score: float = Field(ge=0, le=10)
    summary: str
    audit_items: List[AuditItem] = Field(default_factory=list)
    quick_wins: List[str] = Field(default_factory=list)
    roadmap_to_100: Dict[str, RoadmapPhase] = Field(default_factory=dict)
    seo_analysis: Optional[SeoAnalysis] = None
    competitor_analysis: List[CompetitorInsight] = Field(default_factory=list)


class CopyDiagnosis(BaseModel):
    headline_weakness: str = ""
    cta_weakness: str = ""


class HeadlineOption(BaseModel):
    option: str
    tag: str = ""


class CtaSuggestions(BaseModel):
    primary: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)
    explanation: str = ""


class CopySuggestions(BaseModel):
    """Rewritten headline / CTA copy for one page."""

    diagnosis: CopyDiagnosis = Field(default_factory=CopyDiagnosis)
    headlines: List[HeadlineOption] = Field(default_factory=list)
    subheadlines: List[str] = Field(default_factory=list)
    ctas: CtaSuggestions = Field(default_factory=CtaSuggestions)
    placement: str = ""


class PreviewIssue(BaseModel):
    category: str
    issue: str
    impact: str


class Preview(BaseModel):
    """Cheap, model-free verdict shown before a full audit."""

    url: str
    score: int
    issues: List[PreviewIssue] = Field(default_factory=list)
    message: str = "This is a preview. Run a full report for detailed analysis."
