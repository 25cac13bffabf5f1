"""AI resume evaluator: asks Claude for an ATS score over the document."""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel, Field, ValidationError, field_validator

from resume_ats.analysis.normalizer import strip_markup
from resume_ats.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_ats.models.analysis import ImprovementAction, ResultStatus
from resume_ats.models.document import ResumeDocument

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert ATS (Applicant Tracking System) reviewer. Score the resume
the way an ATS and a recruiter would read it.

Evaluate:
1. Contact completeness and a clear headline
2. Professional summary: length, specificity, years of experience
3. Experience entries: detail, bullet points, action verbs, quantified results
4. Skills: breadth, relevance and grouping
5. Projects, education, certifications and links

Respond with JSON only, in exactly this shape:
{
  "score": 0-100,
  "status": "excellent" | "good" | "needs_improvement" | "poor",
  "feedback": ["short finding", "..."],
  "summary_suggestion": "a rewritten 2-3 sentence summary, or null",
  "missing_keywords": ["keyword related to the stack already on the resume"],
  "improvement_plan": [{"action": "...", "impact": "high" | "medium" | "low"}]
}

Rules:
- Never invent experience the candidate does not have.
- Suggest at most 8 missing keywords, only ones related to the existing stack.
- Keep feedback to at most 5 items."""


class AIEvaluationError(Exception):
    """The AI path produced no usable evaluation."""


class AIEvaluation(BaseModel):
    score: int = Field(ge=0, le=100)
    status: ResultStatus
    feedback: list[str] = []
    summary_suggestion: str | None = None
    missing_keywords: list[str] = Field(default_factory=list, max_length=8)
    improvement_plan: list[ImprovementAction] = []

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, str):
            return v.strip().lower().replace(" ", "_").replace("-", "_")
        return v


def _render_document(document: ResumeDocument) -> str:
    """Plain-text view of the document for the prompt."""
    data = document.model_dump(exclude_none=True)
    for entry in data.get("experience", []) + data.get("projects", []):
        if entry.get("description"):
            entry["description"] = strip_markup(entry["description"])
    if data.get("summary"):
        data["summary"] = strip_markup(data["summary"])
    return json.dumps(data, ensure_ascii=False, indent=2)


class AIResumeEvaluator:
    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL, max_tokens: int = 2048):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens

    async def evaluate(self, document: ResumeDocument) -> AIEvaluation:
        """Score ``document`` with the model.

        Raises AIEvaluationError when the reply is not valid JSON or does not
        match the evaluation shape. Transport errors from the client propagate.
        """
        logger.info("Requesting AI evaluation...")
        prompt = f"""Evaluate this resume for ATS compatibility.

## Resume
{_render_document(document)}

Respond in JSON only."""

        try:
            data = await self.llm.generate_json(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                max_tokens=self.max_tokens,
            )
        except ValueError as exc:
            raise AIEvaluationError(f"Malformed AI response: {exc}") from exc

        try:
            evaluation = AIEvaluation.model_validate(data)
        except ValidationError as exc:
            raise AIEvaluationError(f"AI response did not match the evaluation shape: {exc}") from exc

        if evaluation.status is ResultStatus.INVALID_CONTENT and evaluation.score != 0:
            raise AIEvaluationError("AI marked content invalid with a non-zero score")
        return evaluation
