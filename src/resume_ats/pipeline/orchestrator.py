"""AI-first scoring with a deterministic fallback."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from resume_ats.analysis.analyzer import Analyzer
from resume_ats.analysis.plan import IMPACT_ORDER
from resume_ats.models.analysis import AnalysisResult, ResultStatus
from resume_ats.models.document import ResumeDocument
from resume_ats.pipeline.ai_evaluator import AIEvaluation, AIResumeEvaluator

logger = logging.getLogger(__name__)


class ScoringOrchestrator:
    """Runs the AI evaluator under a deadline and falls back to the rubric.

    The deterministic analysis always runs first; its checks are attached
    to an AI result as well, so callers see the same breakdown either way.
    """

    def __init__(
        self,
        analyzer: Analyzer | None = None,
        evaluator: AIResumeEvaluator | None = None,
        *,
        timeout: float = 20.0,
    ):
        self.analyzer = analyzer or Analyzer()
        self.evaluator = evaluator
        self.timeout = timeout

    async def evaluate(
        self,
        document: ResumeDocument | dict[str, Any],
        *,
        use_ai: bool = True,
    ) -> AnalysisResult:
        doc = ResumeDocument.from_mapping(document)
        rules = self.analyzer.analyze(doc)

        # invalid content never reaches the model
        if rules.status is ResultStatus.INVALID_CONTENT:
            return rules
        if not use_ai or self.evaluator is None:
            logger.debug("AI evaluation disabled; using rubric result")
            return rules.model_copy(update={"is_fallback": True})

        try:
            evaluation = await asyncio.wait_for(self.evaluator.evaluate(doc), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("AI evaluation timed out after %.1fs; using rubric result", self.timeout)
            return rules.model_copy(update={"is_fallback": True})
        except Exception:
            logger.warning("AI evaluation failed; using rubric result", exc_info=True)
            return rules.model_copy(update={"is_fallback": True})

        logger.info("AI evaluation complete: score=%d", evaluation.score)
        return merge_evaluation(rules, evaluation)


def merge_evaluation(rules: AnalysisResult, evaluation: AIEvaluation) -> AnalysisResult:
    """Combine an AI evaluation with the rubric breakdown.

    The AI plan replaces the rubric plan when it has any actions and is
    ranked by impact the same way.
    """
    plan = sorted(evaluation.improvement_plan, key=lambda item: IMPACT_ORDER[item.impact])
    return AnalysisResult(
        score=evaluation.score,
        status=evaluation.status,
        checks=rules.checks,
        missing_keywords=evaluation.missing_keywords or rules.missing_keywords,
        improvement_plan=plan or rules.improvement_plan,
        feedback=evaluation.feedback or rules.feedback,
        suggestions=rules.suggestions,
        summary_suggestion=evaluation.summary_suggestion,
        is_fallback=False,
        source="ai",
    )
