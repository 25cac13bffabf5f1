"""Pydantic models for the resume document consumed by the analyzer."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> str | None:
    """Coerce a scalar field to text; anything unusable becomes absent."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _list_or_empty(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, tuple):
        return list(value)
    return value


class _DocumentModel(BaseModel):
    """Base for document parts: accepts camelCase keys, ignores unknown ones."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Profile(_DocumentModel):
    first_name: str | None = None
    last_name: str | None = None
    headline: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    website: str | None = None
    linkedin: str | None = None
    github: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _optional_text(v)

    @property
    def full_name(self) -> str:
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts)


class ExperienceEntry(_DocumentModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    current: bool = False
    description: str | None = None  # rich text (HTML)

    @field_validator("title", "company", "location", "start_date", "end_date", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _optional_text(v)

    @field_validator("current", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        return v if isinstance(v, bool) else False


class ProjectEntry(_DocumentModel):
    title: str | None = None
    description: str | None = None
    url: str | None = None
    repo_url: str | None = None
    tech_stack: list[str] = []

    @field_validator("title", "description", "url", "repo_url", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _optional_text(v)

    @field_validator("tech_stack", mode="before")
    @classmethod
    def coerce_stack(cls, v: Any) -> list[str]:
        return [s for s in (_optional_text(x) for x in _list_or_empty(v)) if s]


class EducationEntry(_DocumentModel):
    institution: str | None = None
    degree: str | None = None
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _optional_text(v)


class CertificationEntry(_DocumentModel):
    name: str | None = None
    issuer: str | None = None
    date: str | None = None
    url: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _optional_text(v)


class SkillGroup(_DocumentModel):
    name: str | None = None
    skills: list[str] = []

    @field_validator("name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _optional_text(v)

    @field_validator("skills", mode="before")
    @classmethod
    def coerce_skill_names(cls, v: Any) -> list[str]:
        # Editors store skills either as plain names or {"name": ...} objects
        names = []
        for item in _list_or_empty(v):
            if isinstance(item, dict):
                item = item.get("name")
            text = _optional_text(item)
            if text and text.strip():
                names.append(text.strip())
        return names


class ResumeDocument(_DocumentModel):
    profile: Profile = Field(default_factory=Profile)
    summary: str | None = None
    experience: list[ExperienceEntry] = []
    projects: list[ProjectEntry] = []
    education: list[EducationEntry] = []
    certifications: list[CertificationEntry] = []
    skills: list[SkillGroup] = []

    @field_validator("profile", mode="before")
    @classmethod
    def coerce_profile(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_summary(cls, v: Any) -> str | None:
        return _optional_text(v)

    @field_validator("experience", "projects", "education", "certifications", "skills", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any) -> Any:
        return _list_or_empty(v)

    @property
    def skill_count(self) -> int:
        return sum(len(g.skills) for g in self.skills)

    @classmethod
    def from_mapping(cls, data: Any) -> ResumeDocument:
        """Build a document from loosely-shaped data without raising.

        Tries a strict validation first. When that fails, each section is
        validated on its own and entries that still fail are dropped.
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            logger.debug("Ignoring non-mapping document input: %s", type(data).__name__)
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            logger.debug("Lenient document validation (%d errors)", exc.error_count())

        def _get(key: str) -> Any:
            snake = key
            camel = to_camel(key)
            return data.get(snake, data.get(camel))

        fields: dict[str, Any] = {}
        profile = _get("profile")
        if isinstance(profile, dict):
            fields["profile"] = _validate_or_none(Profile, profile) or Profile()
        fields["summary"] = _optional_text(_get("summary"))

        sections = {
            "experience": ExperienceEntry,
            "projects": ProjectEntry,
            "education": EducationEntry,
            "certifications": CertificationEntry,
            "skills": SkillGroup,
        }
        for key, model in sections.items():
            raw = _get(key)
            items = raw if isinstance(raw, (list, tuple)) else []
            fields[key] = [
                entry for entry in (_validate_or_none(model, item) for item in items)
                if entry is not None
            ]
        return cls(**fields)


def _validate_or_none(model: type[BaseModel], item: Any) -> BaseModel | None:
    if not isinstance(item, dict):
        return None
    try:
        return model.model_validate(item)
    except ValidationError:
        return None
