"""Rubric checks and the declarative rubric table.

Every check is a pure function over a ``CheckContext``. The rubric pairs each
evaluator with its id, label, weight and priority, so the weights and
priorities can be inspected and tested without running any evaluator.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Callable, Iterable, Iterator

from resume_ats.analysis.normalizer import NormalizedContent, mentions_word
from resume_ats.analysis.patterns import PatternLibrary
from resume_ats.models.analysis import Check, CheckStatus, Impact
from resume_ats.models.document import ResumeDocument

_YEARS = re.compile(r"\d+\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)


@dataclass(frozen=True)
class Thresholds:
    """Numeric cut-offs used by the checks."""

    contact_pass: int = 4
    contact_warning: int = 3
    summary_min_length: int = 100
    summary_max_length: int = 400
    summary_warning_length: int = 50
    experience_min_entries: int = 2
    experience_detail_length: int = 50
    skills_pass: int = 8
    skills_warning: int = 4
    skill_categories: int = 2
    action_verbs_pass: int = 6
    action_verbs_warning: int = 3
    metrics_pass: int = 4
    metrics_warning: int = 1
    bullets_pass: float = 3.0
    bullets_warning: float = 1.0
    weak_phrases_warning: int = 2
    description_pass: int = 200
    description_warning: int = 100
    links_pass: int = 2

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be non-negative")
        pairs = [
            ("contact_warning", "contact_pass"),
            ("summary_warning_length", "summary_min_length"),
            ("summary_min_length", "summary_max_length"),
            ("skills_warning", "skills_pass"),
            ("action_verbs_warning", "action_verbs_pass"),
            ("metrics_warning", "metrics_pass"),
            ("bullets_warning", "bullets_pass"),
            ("description_warning", "description_pass"),
        ]
        for low, high in pairs:
            if getattr(self, low) > getattr(self, high):
                raise ValueError(f"{low} must not exceed {high}")
        if self.contact_pass > 4:
            raise ValueError("contact_pass cannot exceed the 4 contact fields")
        if self.links_pass > 3:
            raise ValueError("links_pass cannot exceed the 3 link fields")


@dataclass(frozen=True)
class CheckContext:
    document: ResumeDocument
    content: NormalizedContent
    patterns: PatternLibrary
    thresholds: Thresholds


@dataclass(frozen=True)
class Hint:
    """A user-facing action. ``impact`` overrides the derived impact."""

    action: str
    impact: Impact | None = None


@dataclass(frozen=True)
class Evaluation:
    status: CheckStatus
    message: str
    hints: tuple[Hint, ...] = ()
    suggestions: tuple[str, ...] = ()


Evaluator = Callable[[CheckContext], Evaluation]


@dataclass(frozen=True)
class CheckOutcome:
    check: Check
    hints: tuple[Hint, ...] = ()
    suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class CheckDescriptor:
    id: str
    label: str
    evaluate: Evaluator
    weight: float
    priority: int

    def run(self, context: CheckContext) -> CheckOutcome:
        result = self.evaluate(context)
        check = Check(
            id=self.id,
            label=self.label,
            status=result.status,
            message=result.message,
            weight=self.weight,
            priority=self.priority,
        )
        return CheckOutcome(check=check, hints=result.hints, suggestions=result.suggestions)


class Rubric:
    """Ordered, immutable set of check descriptors."""

    def __init__(self, descriptors: Iterable[CheckDescriptor]):
        self._descriptors = tuple(descriptors)
        ids = [d.id for d in self._descriptors]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate check ids: {', '.join(duplicates)}")
        for d in self._descriptors:
            if d.weight <= 0:
                raise ValueError(f"Check {d.id!r} must have a positive weight")
            if d.priority not in (1, 2, 3):
                raise ValueError(f"Check {d.id!r} has invalid priority {d.priority}")

    def __iter__(self) -> Iterator[CheckDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __getitem__(self, check_id: str) -> CheckDescriptor:
        for d in self._descriptors:
            if d.id == check_id:
                return d
        raise KeyError(check_id)

    @property
    def ids(self) -> list[str]:
        return [d.id for d in self._descriptors]

    @property
    def total_weight(self) -> float:
        return sum(d.weight for d in self._descriptors)

    def weight_by_priority(self) -> dict[int, float]:
        totals = {1: 0.0, 2: 0.0, 3: 0.0}
        for d in self._descriptors:
            totals[d.priority] += d.weight
        return totals

    def evaluate(self, context: CheckContext) -> list[CheckOutcome]:
        return [d.run(context) for d in self._descriptors]


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def _bucket(value: float, pass_at: float, warn_at: float) -> CheckStatus:
    if value >= pass_at:
        return CheckStatus.PASS
    if value >= warn_at:
        return CheckStatus.WARNING
    return CheckStatus.FAIL


# --- Priority 1: critical ---


def check_contact(ctx: CheckContext) -> Evaluation:
    profile = ctx.document.profile
    has = {
        "name": _present(profile.first_name) and _present(profile.last_name),
        "email": _present(profile.email),
        "phone": _present(profile.phone),
        "location": _present(profile.location),
    }
    present = sum(has.values())
    status = _bucket(present, ctx.thresholds.contact_pass, ctx.thresholds.contact_warning)
    missing = [name for name, ok in has.items() if not ok]
    if not missing:
        return Evaluation(status, "Name, email, phone, and location provided")
    return Evaluation(
        status,
        f"Missing: {', '.join(missing)}",
        hints=(Hint("Complete all contact information fields"),),
    )


def check_summary(ctx: CheckContext) -> Evaluation:
    t = ctx.thresholds
    summary = ctx.content.summary
    length = len(summary)
    has_years = bool(_YEARS.search(summary))
    lowered = summary.lower()
    has_skill = any(mentions_word(lowered, skill) for skill in ctx.content.skills)

    in_range = t.summary_min_length <= length <= t.summary_max_length
    if in_range and has_years and has_skill:
        return Evaluation(CheckStatus.PASS, f"Well-structured summary ({length} chars)")

    status = CheckStatus.WARNING if length >= t.summary_warning_length else CheckStatus.FAIL
    if length == 0:
        return Evaluation(
            status,
            "Add a professional summary",
            hints=(Hint("Write a 2-3 sentence professional summary"),),
        )

    problems = []
    hints = []
    if length < t.summary_min_length:
        problems.append("too short")
        hints.append(Hint("Expand professional summary to 2-3 impactful sentences"))
    if length > t.summary_max_length:
        problems.append("too long")
        hints.append(Hint(f"Tighten professional summary to under {t.summary_max_length} characters"))
    if not has_years:
        problems.append("add years of experience")
        hints.append(Hint("Add years of experience to summary", Impact.MEDIUM))
    if not has_skill:
        problems.append("include key skills")
        hints.append(Hint("Mention your strongest skills in the summary", Impact.MEDIUM))
    return Evaluation(status, f"Improve summary: {', '.join(problems)}", hints=tuple(hints))


def check_experience(ctx: CheckContext) -> Evaluation:
    t = ctx.thresholds
    count = len(ctx.document.experience)
    detailed = sum(1 for d in ctx.content.descriptions if len(d) > t.experience_detail_length)

    if count == 0:
        return Evaluation(
            CheckStatus.FAIL,
            "Add your work experience",
            hints=(Hint("Add at least 2 relevant work experiences"),),
        )
    message = f"{count} position(s) ({detailed} with detailed descriptions)"
    if count >= t.experience_min_entries and detailed >= t.experience_min_entries:
        return Evaluation(CheckStatus.PASS, message)

    hints = []
    if detailed < count:
        hints.append(Hint("Add detailed bullet points to all experience entries", Impact.HIGH))
    if count < t.experience_min_entries:
        hints.append(Hint(f"Add at least {t.experience_min_entries} relevant work experiences"))
    return Evaluation(CheckStatus.WARNING, message, hints=tuple(hints))


def check_skills(ctx: CheckContext) -> Evaluation:
    t = ctx.thresholds
    count = len(ctx.content.skills)
    categories = sum(1 for g in ctx.document.skills if g.skills)

    if count == 0:
        return Evaluation(
            CheckStatus.FAIL,
            "Add your technical and professional skills",
            hints=(Hint(f"Add {t.skills_pass}-15 relevant technical skills"),),
        )
    message = f"{count} skills in {categories} categories"
    if count >= t.skills_pass and categories >= t.skill_categories:
        return Evaluation(CheckStatus.PASS, message)
    if count >= t.skills_pass:
        return Evaluation(
            CheckStatus.WARNING,
            message,
            hints=(Hint("Group your skills into categories such as Languages and Tools", Impact.MEDIUM),),
        )
    status = CheckStatus.WARNING if count >= t.skills_warning else CheckStatus.FAIL
    return Evaluation(status, message, hints=(Hint(f"Add {t.skills_pass - count} more relevant skills"),))


# --- Priority 2: important ---


def check_action_verbs(ctx: CheckContext) -> Evaluation:
    t = ctx.thresholds
    verbs = ctx.patterns.match_action_verbs(ctx.content.text)
    count = len(verbs)
    status = _bucket(count, t.action_verbs_pass, t.action_verbs_warning)
    if status is CheckStatus.PASS:
        shown = ", ".join(v.capitalize() for v in verbs[:5])
        return Evaluation(status, f"Using {count} power verbs ({shown}...)")

    message = f"Only {count} action verbs. Start bullets with: Led, Developed, Achieved, Implemented"
    if status is CheckStatus.WARNING:
        hint = Hint("Start bullet points with action verbs (Led, Built, Achieved)")
    else:
        hint = Hint("Replace passive language with action verbs")
    return Evaluation(
        status,
        message,
        hints=(hint,),
        suggestions=("Start each bullet point with a strong action verb",),
    )


def check_metrics(ctx: CheckContext) -> Evaluation:
    t = ctx.thresholds
    found = ctx.patterns.count_metrics(ctx.content.text)
    status = _bucket(found, t.metrics_pass, t.metrics_warning)
    if status is CheckStatus.PASS:
        return Evaluation(status, f"{found} quantifiable achievements found")
    hint = Hint("Add quantifiable metrics (%, $, team sizes) to each role", Impact.HIGH)
    if status is CheckStatus.WARNING:
        message = f"Only {found} metric(s). Add more percentages, dollar amounts, or numbers"
    else:
        message = "No metrics found. Quantify your achievements with specific numbers"
    return Evaluation(status, message, hints=(hint,))


def check_bullet_points(ctx: CheckContext) -> Evaluation:
    t = ctx.thresholds
    count = len(ctx.document.experience)
    if count == 0:
        return Evaluation(CheckStatus.FAIL, "Use bullet points to list achievements")

    average = ctx.content.bullet_count / count
    status = _bucket(average, t.bullets_pass, t.bullets_warning)
    if status is CheckStatus.PASS:
        return Evaluation(status, f"Good average of {average:.1f} bullets per role")
    return Evaluation(
        status,
        f"Average {average:.1f} bullets/role. Aim for 3-5 per position",
        hints=(Hint("Break each role into 3-5 achievement bullet points"),),
    )


def check_weak_phrases(ctx: CheckContext) -> Evaluation:
    found = ctx.patterns.find_weak_phrases(ctx.content.text)
    if not found:
        return Evaluation(CheckStatus.PASS, "No weak phrases detected")

    status = CheckStatus.WARNING if len(found) <= ctx.thresholds.weak_phrases_warning else CheckStatus.FAIL
    quoted = '", "'.join(found[:2])
    tip = f'Replace "{found[0]}" with action verbs'
    return Evaluation(
        status,
        f'Found passive phrases: "{quoted}"',
        hints=(Hint(tip),),
        suggestions=(tip,),
    )


def check_description_depth(ctx: CheckContext) -> Evaluation:
    t = ctx.thresholds
    lengths = [len(d) for d in ctx.content.descriptions]
    average = sum(lengths) / len(lengths) if lengths else 0.0
    status = _bucket(average, t.description_pass, t.description_warning)
    if status is CheckStatus.PASS:
        return Evaluation(status, "Detailed descriptions across roles")
    if status is CheckStatus.WARNING:
        return Evaluation(
            status,
            "Add more detail to your job descriptions",
            hints=(Hint("Add more detail to your job descriptions"),),
        )
    return Evaluation(
        status,
        "Expand descriptions with specific achievements",
        hints=(Hint("Expand descriptions with specific achievements"),),
    )


def check_dates(ctx: CheckContext) -> Evaluation:
    entries = ctx.document.experience
    count = len(entries)
    if count == 0:
        return Evaluation(CheckStatus.FAIL, "Add dates to your work experience")

    missing = sum(1 for e in entries if not _present(e.start_date))
    # current roles legitimately have no end date
    open_ended = sum(1 for e in entries if not e.current and not _present(e.end_date))
    note = f" ({open_ended} without an end date or current flag)" if open_ended else ""

    if missing == 0:
        return Evaluation(CheckStatus.PASS, f"All positions have dates{note}")
    hint = Hint("Add start dates to every position")
    if missing * 2 > count:
        return Evaluation(
            CheckStatus.FAIL,
            f"{missing} of {count} position(s) missing dates",
            hints=(hint,),
        )
    return Evaluation(CheckStatus.WARNING, f"{missing} position(s) missing dates{note}", hints=(hint,))


# --- Priority 3: nice to have ---


def check_education(ctx: CheckContext) -> Evaluation:
    entries = ctx.document.education
    if not entries:
        return Evaluation(
            CheckStatus.WARNING,
            "Consider adding educational background",
            hints=(Hint("Add your educational background"),),
        )
    if any(_present(e.end_date) for e in entries):
        return Evaluation(CheckStatus.PASS, f"{len(entries)} education entries")
    return Evaluation(
        CheckStatus.WARNING,
        f"{len(entries)} education entries (no graduation dates)",
        hints=(Hint("Add graduation dates to your education"),),
    )


def check_links(ctx: CheckContext) -> Evaluation:
    profile = ctx.document.profile
    count = sum(_present(v) for v in (profile.linkedin, profile.github, profile.website))
    if count >= ctx.thresholds.links_pass:
        return Evaluation(CheckStatus.PASS, f"{count} professional links included")
    if count:
        return Evaluation(
            CheckStatus.WARNING,
            "Add more professional links",
            hints=(Hint("Add a GitHub or portfolio link alongside LinkedIn"),),
        )
    return Evaluation(
        CheckStatus.WARNING,
        "Add LinkedIn and/or portfolio links",
        hints=(Hint("Add LinkedIn and/or portfolio links"),),
    )


def check_certifications(ctx: CheckContext) -> Evaluation:
    count = len(ctx.document.certifications)
    if count:
        return Evaluation(CheckStatus.PASS, f"{count} certifications listed")
    return Evaluation(
        CheckStatus.WARNING,
        "Consider adding relevant certifications",
        hints=(Hint("Consider adding relevant certifications"),),
    )


def check_projects(ctx: CheckContext) -> Evaluation:
    projects = ctx.document.projects
    if not projects:
        return Evaluation(
            CheckStatus.WARNING,
            "Consider adding relevant projects",
            hints=(Hint("Add 2-3 relevant projects with descriptions", Impact.MEDIUM),),
        )
    linked = sum(1 for p in projects if _present(p.url) or _present(p.repo_url))
    message = f"{len(projects)} projects ({linked} with links)"
    if linked:
        return Evaluation(CheckStatus.PASS, message)
    return Evaluation(
        CheckStatus.WARNING,
        message,
        hints=(Hint("Link your projects to a live demo or repository"),),
    )


def check_headline(ctx: CheckContext) -> Evaluation:
    if _present(ctx.document.profile.headline):
        return Evaluation(CheckStatus.PASS, "Professional headline present")
    return Evaluation(
        CheckStatus.WARNING,
        "Add a professional headline/title",
        hints=(Hint("Add a professional headline/title"),),
    )


DEFAULT_RUBRIC = Rubric((
    CheckDescriptor("contact", "Contact Information", check_contact, weight=15, priority=1),
    CheckDescriptor("summary", "Professional Summary", check_summary, weight=15, priority=1),
    CheckDescriptor("experience", "Work Experience", check_experience, weight=20, priority=1),
    CheckDescriptor("skills", "Skills Section", check_skills, weight=16, priority=1),
    CheckDescriptor("action_verbs", "Action Verbs", check_action_verbs, weight=8, priority=2),
    CheckDescriptor("metrics", "Quantifiable Metrics", check_metrics, weight=12, priority=2),
    CheckDescriptor("bullet_points", "Bullet Point Structure", check_bullet_points, weight=8, priority=2),
    CheckDescriptor("weak_phrases", "Language Quality", check_weak_phrases, weight=5, priority=2),
    CheckDescriptor("description_depth", "Description Depth", check_description_depth, weight=8, priority=2),
    CheckDescriptor("dates", "Date Consistency", check_dates, weight=5, priority=2),
    CheckDescriptor("education", "Education", check_education, weight=5, priority=3),
    CheckDescriptor("links", "Professional Links", check_links, weight=4, priority=3),
    CheckDescriptor("certifications", "Certifications", check_certifications, weight=3, priority=3),
    CheckDescriptor("projects", "Projects", check_projects, weight=4, priority=3),
    CheckDescriptor("headline", "Professional Headline", check_headline, weight=3, priority=3),
))
