"""Pydantic models for analyzer output."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CheckStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ResultStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
    POOR = "poor"
    INVALID_CONTENT = "invalid_content"


class Check(BaseModel):
    """One rubric rule evaluated against a document."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    status: CheckStatus
    message: str
    weight: float = Field(gt=0)
    priority: int = Field(ge=1, le=3)  # 1 critical, 2 important, 3 nice-to-have


class ImprovementAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: str
    impact: Impact


class AnalysisResult(BaseModel):
    """Outcome of a single analyzer run."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    status: ResultStatus
    checks: list[Check] = []
    missing_keywords: list[str] = []
    improvement_plan: list[ImprovementAction] = []
    feedback: list[str] = []
    suggestions: list[str] = []
    summary_suggestion: str | None = None
    is_fallback: bool = False
    source: str = "rules"  # "rules" | "ai"

    def checks_by_priority(self, priority: int) -> list[Check]:
        return [c for c in self.checks if c.priority == priority]

    def get_check(self, check_id: str) -> Check | None:
        return next((c for c in self.checks if c.id == check_id), None)
