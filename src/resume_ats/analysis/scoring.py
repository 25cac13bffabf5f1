"""Weighted score aggregation with partial credit."""

from __future__ import annotations

import math
from typing import Iterable

from resume_ats.models.analysis import Check, CheckStatus, ResultStatus

CREDIT: dict[CheckStatus, float] = {
    CheckStatus.PASS: 1.0,
    CheckStatus.WARNING: 0.5,
    CheckStatus.FAIL: 0.0,
}

# (inclusive lower bound, bucket), highest first
STATUS_BUCKETS: tuple[tuple[int, ResultStatus], ...] = (
    (85, ResultStatus.EXCELLENT),
    (70, ResultStatus.GOOD),
    (50, ResultStatus.NEEDS_IMPROVEMENT),
)


def earned_weight(check: Check) -> float:
    return check.weight * CREDIT[check.status]


def aggregate(checks: Iterable[Check]) -> int:
    """Return round(100 * earned / total), rounding halves up."""
    total = 0.0
    earned = 0.0
    for check in checks:
        total += check.weight
        earned += earned_weight(check)
    if total <= 0:
        return 0
    score = math.floor(100 * earned / total + 0.5)
    return max(0, min(100, score))


def status_for_score(score: int) -> ResultStatus:
    for lower, status in STATUS_BUCKETS:
        if score >= lower:
            return status
    return ResultStatus.POOR
