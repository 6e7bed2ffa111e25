"""Analysis-stage failures."""

from __future__ import annotations


class AnalysisError(Exception):
    """The model call failed or returned output that is not a valid report."""
