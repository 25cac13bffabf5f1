"""Adapter from the public-profile bundle to a ResumeDocument.

The portfolio side of the product stores a looser shape: a profile with a
display name, ``experiences`` carrying their own skill lists, and projects
with tech stacks but no separate skills section. This module maps that shape
onto the resume document so the same analyzer scores both.
"""

from __future__ import annotations

from typing import Any

from resume_ats.models.document import ResumeDocument


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _items(value: Any) -> list[dict]:
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, dict)]


def _names(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    names = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("name")
        if isinstance(item, str) and item.strip():
            names.append(item.strip())
    return names


def looks_like_profile_bundle(data: dict) -> bool:
    return "experiences" in data and "experience" not in data


def _split_name(display_name: str) -> tuple[str | None, str | None]:
    parts = display_name.split()
    if not parts:
        return None, None
    if len(parts) == 1:
        return parts[0], None
    return " ".join(parts[:-1]), parts[-1]


def _description(entry: dict) -> str | None:
    description = entry.get("description")
    highlights = _names(entry.get("highlights"))
    if not highlights:
        return description if isinstance(description, str) else None
    bullets = "".join(f"<li>{h}</li>" for h in highlights)
    prefix = description if isinstance(description, str) else ""
    return f"{prefix}<ul>{bullets}</ul>"


def document_from_profile(bundle: dict[str, Any]) -> ResumeDocument:
    profile = _mapping(bundle.get("profile"))
    user = _mapping(bundle.get("user"))

    first = profile.get("firstName") or profile.get("first_name")
    last = profile.get("lastName") or profile.get("last_name")
    if not (first or last):
        display = profile.get("displayName") or profile.get("name") or user.get("name") or ""
        first, last = _split_name(display if isinstance(display, str) else "")

    socials = _mapping(profile.get("socials"))
    profile_fields = {
        "first_name": first,
        "last_name": last,
        "headline": profile.get("headline"),
        "email": profile.get("email") or user.get("email"),
        "phone": profile.get("phone"),
        "location": profile.get("location"),
        "website": profile.get("website") or socials.get("website"),
        "linkedin": profile.get("linkedin") or socials.get("linkedin"),
        "github": profile.get("github") or socials.get("github"),
    }

    experience = []
    experience_skills: list[str] = []
    for entry in _items(bundle.get("experiences")):
        experience.append({
            "title": entry.get("title") or entry.get("role"),
            "company": entry.get("company"),
            "location": entry.get("location"),
            "start_date": entry.get("startDate") or entry.get("start_date"),
            "end_date": entry.get("endDate") or entry.get("end_date"),
            "current": entry.get("current", entry.get("isCurrent", False)),
            "description": _description(entry),
        })
        experience_skills.extend(_names(entry.get("skills")))

    projects = []
    project_skills: list[str] = []
    for entry in _items(bundle.get("projects")):
        stack = _names(entry.get("techStack") or entry.get("tech_stack") or entry.get("technologies"))
        projects.append({
            "title": entry.get("title"),
            "description": _description(entry),
            "url": entry.get("url") or entry.get("liveUrl"),
            "repo_url": entry.get("repoUrl") or entry.get("repo_url") or entry.get("githubUrl"),
            "tech_stack": stack,
        })
        project_skills.extend(stack)

    skills = _skill_groups(bundle.get("skills"))
    if project_skills:
        skills.append({"name": "Project Stack", "skills": project_skills})
    if experience_skills:
        skills.append({"name": "Professional", "skills": experience_skills})

    certifications = [
        {
            "name": c.get("name") or c.get("title"),
            "issuer": c.get("issuer"),
            "date": c.get("date") or c.get("issueDate"),
            "url": c.get("url"),
        }
        for c in _items(bundle.get("certifications") or bundle.get("certificates"))
    ]

    return ResumeDocument.from_mapping({
        "profile": profile_fields,
        "summary": profile.get("summary") or profile.get("bio") or bundle.get("summary"),
        "experience": experience,
        "projects": projects,
        "education": _items(bundle.get("education")),
        "certifications": certifications,
        "skills": skills,
    })


def _skill_groups(value: Any) -> list[dict]:
    """Group flat skill records ({name, category}) by category."""
    if not isinstance(value, (list, tuple)):
        return []
    if all(isinstance(v, dict) and "skills" in v for v in value) and value:
        return [dict(v) for v in value]

    groups: dict[str, list[str]] = {}
    for item in value:
        if isinstance(item, dict):
            name = item.get("name")
            category = item.get("category") or "Skills"
        else:
            name, category = item, "Skills"
        if isinstance(name, str) and name.strip():
            groups.setdefault(str(category), []).append(name.strip())
    return [{"name": category, "skills": names} for category, names in groups.items()]
