"""Improvement plan and feedback built from non-passing checks."""

from __future__ import annotations

from typing import Iterable

from resume_ats.analysis.checks import CheckOutcome
from resume_ats.models.analysis import Check, CheckStatus, Impact, ImprovementAction

# (priority, status) -> impact
IMPACT_MATRIX: dict[tuple[int, CheckStatus], Impact] = {
    (1, CheckStatus.FAIL): Impact.HIGH,
    (1, CheckStatus.WARNING): Impact.HIGH,
    (2, CheckStatus.FAIL): Impact.HIGH,
    (2, CheckStatus.WARNING): Impact.MEDIUM,
    (3, CheckStatus.FAIL): Impact.MEDIUM,
    (3, CheckStatus.WARNING): Impact.LOW,
}

IMPACT_ORDER: dict[Impact, int] = {Impact.HIGH: 0, Impact.MEDIUM: 1, Impact.LOW: 2}

DEFAULT_DISPLAY_LIMIT = 5
MAX_FEEDBACK = 5
ALL_PASSED_FEEDBACK = "Your resume looks good! Consider adding more quantifiable achievements."


def derive_impact(priority: int, status: CheckStatus) -> Impact:
    return IMPACT_MATRIX.get((priority, status), Impact.LOW)


def build_improvement_plan(outcomes: Iterable[CheckOutcome]) -> list[ImprovementAction]:
    """Collect hints from Warning/Fail checks, sorted stably by impact."""
    plan: list[ImprovementAction] = []
    seen: set[str] = set()
    for outcome in outcomes:
        check = outcome.check
        if check.status is CheckStatus.PASS:
            continue
        for hint in outcome.hints:
            if hint.action in seen:
                continue
            seen.add(hint.action)
            impact = hint.impact or derive_impact(check.priority, check.status)
            plan.append(ImprovementAction(action=hint.action, impact=impact))
    plan.sort(key=lambda item: IMPACT_ORDER[item.impact])
    return plan


def truncate_plan(plan: list[ImprovementAction], limit: int = DEFAULT_DISPLAY_LIMIT) -> list[ImprovementAction]:
    return plan[: max(0, limit)]


def build_feedback(checks: Iterable[Check], limit: int = MAX_FEEDBACK) -> list[str]:
    lines = [f"{c.label}: {c.message}" for c in checks if c.status is not CheckStatus.PASS]
    if not lines:
        return [ALL_PASSED_FEEDBACK]
    return lines[:limit]


def collect_suggestions(outcomes: Iterable[CheckOutcome]) -> list[str]:
    suggestions: list[str] = []
    for outcome in outcomes:
        if outcome.check.status is CheckStatus.PASS:
            continue
        for tip in outcome.suggestions:
            if tip not in suggestions:
                suggestions.append(tip)
    return suggestions
