"""Deterministic rubric-based resume analysis."""

from resume_ats.analysis.analyzer import Analyzer, analyze
from resume_ats.analysis.checks import (
    DEFAULT_RUBRIC,
    CheckContext,
    CheckDescriptor,
    Rubric,
    Thresholds,
)
from resume_ats.analysis.patterns import PatternLibrary
from resume_ats.analysis.relevance import KeywordGraph

__all__ = [
    "Analyzer",
    "CheckContext",
    "CheckDescriptor",
    "DEFAULT_RUBRIC",
    "KeywordGraph",
    "PatternLibrary",
    "Rubric",
    "Thresholds",
    "analyze",
]
