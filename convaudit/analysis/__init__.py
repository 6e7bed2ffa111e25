"""Analysis package: preview heuristics and model-backed audits."""

from convaudit.analysis.analyzer import analyze_page, generate_copy
from convaudit.analysis.errors import AnalysisError
from convaudit.analysis.models import AuditReport, CopySuggestions, Preview
from convaudit.analysis.preview import build_preview

__all__ = [
    "analyze_page",
    "generate_copy",
    "build_preview",
    "AnalysisError",
    "AuditReport",
    "CopySuggestions",
    "Preview",
]
