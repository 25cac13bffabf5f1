"""Deterministic resume analyzer: the public scoring entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from resume_ats.analysis.checks import DEFAULT_RUBRIC, CheckContext, Rubric, Thresholds
from resume_ats.analysis.keywords import DEFAULT_KEYWORD_LIMIT, find_missing_keywords
from resume_ats.analysis.normalizer import (
    DEFAULT_MIN_CONTENT_LENGTH,
    NormalizedContent,
    content_length,
    is_insufficient,
    is_placeholder,
    normalize,
)
from resume_ats.analysis.patterns import DEFAULT_PATTERNS, PatternLibrary
from resume_ats.analysis.plan import (
    build_feedback,
    build_improvement_plan,
    collect_suggestions,
)
from resume_ats.analysis.relevance import DEFAULT_GRAPH, KeywordGraph
from resume_ats.analysis.scoring import aggregate, status_for_score
from resume_ats.models.analysis import (
    AnalysisResult,
    Check,
    Impact,
    ImprovementAction,
    ResultStatus,
)
from resume_ats.models.document import ResumeDocument

if TYPE_CHECKING:
    from resume_ats.config import AppConfig

logger = logging.getLogger(__name__)

INVALID_CONTENT_KEYWORDS = ["Real Experience", "Real Skills", "Achievements"]
PLACEHOLDER_FEEDBACK = "Placeholder text detected (e.g. \"Lorem ipsum\"). Replace it with real content."
INSUFFICIENT_FEEDBACK = "Insufficient content: {length} characters of descriptive text (minimum {minimum})."


class Analyzer:
    """Runs the rubric, keyword gap analysis and plan builder over a document.

    Instances hold only immutable configuration, so one analyzer can be
    shared across threads and called repeatedly.
    """

    def __init__(
        self,
        rubric: Rubric = DEFAULT_RUBRIC,
        patterns: PatternLibrary = DEFAULT_PATTERNS,
        graph: KeywordGraph = DEFAULT_GRAPH,
        thresholds: Thresholds | None = None,
        *,
        min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH,
        keyword_limit: int = DEFAULT_KEYWORD_LIMIT,
    ):
        self.rubric = rubric
        self.patterns = patterns
        self.graph = graph
        self.thresholds = thresholds or Thresholds()
        self.min_content_length = min_content_length
        self.keyword_limit = keyword_limit

    @classmethod
    def from_config(cls, config: AppConfig) -> Analyzer:
        """Build an analyzer from loaded settings, applying table overrides."""
        settings = config.analyzer
        patterns = (
            PatternLibrary.from_yaml(settings.patterns_path)
            if settings.patterns_path else DEFAULT_PATTERNS
        )
        graph = KeywordGraph.from_yaml(settings.graph_path) if settings.graph_path else DEFAULT_GRAPH
        return cls(
            patterns=patterns,
            graph=graph,
            thresholds=config.thresholds,
            min_content_length=settings.min_content_length,
            keyword_limit=settings.keyword_limit,
        )

    def analyze(self, document: ResumeDocument | dict[str, Any]) -> AnalysisResult:
        doc = ResumeDocument.from_mapping(document)
        content = normalize(doc)
        context = CheckContext(
            document=doc,
            content=content,
            patterns=self.patterns,
            thresholds=self.thresholds,
        )
        outcomes = self.rubric.evaluate(context)
        checks = [o.check for o in outcomes]

        placeholder = is_placeholder(content.text) or is_placeholder(doc.profile.headline or "")
        if placeholder or is_insufficient(content, self.min_content_length):
            return self._invalid_result(checks, content, placeholder)

        score = aggregate(checks)
        status = status_for_score(score)
        logger.debug("Analyzed resume: score=%d status=%s", score, status.value)
        return AnalysisResult(
            score=score,
            status=status,
            checks=checks,
            missing_keywords=find_missing_keywords(content, self.graph, self.keyword_limit),
            improvement_plan=build_improvement_plan(outcomes),
            feedback=build_feedback(checks),
            suggestions=collect_suggestions(outcomes),
        )

    def _invalid_result(
        self,
        checks: list[Check],
        content: NormalizedContent,
        placeholder: bool,
    ) -> AnalysisResult:
        if placeholder:
            feedback = PLACEHOLDER_FEEDBACK
            action = "Replace placeholder text with your real experience and achievements"
        else:
            feedback = INSUFFICIENT_FEEDBACK.format(
                length=content_length(content), minimum=self.min_content_length,
            )
            action = "Add a professional summary and detailed experience descriptions"
        logger.debug("Invalid content short-circuit (placeholder=%s)", placeholder)
        return AnalysisResult(
            score=0,
            status=ResultStatus.INVALID_CONTENT,
            checks=checks,
            missing_keywords=list(INVALID_CONTENT_KEYWORDS),
            improvement_plan=[ImprovementAction(action=action, impact=Impact.HIGH)],
            feedback=[feedback],
        )


_default_analyzer = Analyzer()


def analyze(document: ResumeDocument | dict[str, Any]) -> AnalysisResult:
    """Score a resume document with the default rubric."""
    return _default_analyzer.analyze(document)
