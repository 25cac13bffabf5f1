"""Plain-text views of a resume document for the pattern matchers."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

from resume_ats.models.document import ResumeDocument

_TAG = re.compile(r"</?[a-zA-Z][^>]*>")
_BLOCK_TAG = re.compile(r"</?(?:br|p|div|li|ul|ol|h[1-6])\b[^>]*>", re.IGNORECASE)
_TAG_OPENER = re.compile(r"<(?=/?[a-zA-Z])")
_LIST_ITEM = re.compile(r"<\s*li\b", re.IGNORECASE)
_TEXT_BULLET = re.compile(r"^\s*[-*•●◦▪■‣]\s+\S", re.MULTILINE)
_SPACES = re.compile(r"[ \t\u00a0]+")
_BLANK_LINES = re.compile(r"\n\s*\n+")

PLACEHOLDER_PATTERNS = (
    re.compile(r"\blorem\b"),
    re.compile(r"\bipsum dolor\b"),
    re.compile(r"\bdolor sit amet\b"),
    re.compile(r"\bconsectetur adipiscing\b"),
    re.compile(r"\byour (?:name|company|title|job title) here\b"),
)

DEFAULT_MIN_CONTENT_LENGTH = 200


def strip_markup(text: str | None) -> str:
    """Remove HTML tags and tidy whitespace.

    Only real tags are removed, so a bare `<` or `>` in text ("<50ms")
    survives. Block-level tags become line breaks so list items stay on
    their own lines. Entities are decoded only when the input carried
    markup, and a decoded `<` that would open a tag is written back as
    `&lt;` so a second pass leaves the result unchanged.
    """
    if not text:
        return ""
    if _TAG.search(text):
        text = _BLOCK_TAG.sub("\n", text)
        text = _TAG.sub("", text)
        text = html.unescape(text)
        text = _TAG_OPENER.sub("&lt;", text)
    text = _SPACES.sub(" ", text)
    lines = [line.strip() for line in text.split("\n")]
    text = "\n".join(lines)
    text = _BLANK_LINES.sub("\n", text)
    return text.strip()


def count_bullets(description: str | None) -> int:
    """Count list items in a rich-text or plain-text description."""
    if not description:
        return 0
    items = len(_LIST_ITEM.findall(description))
    if items:
        return items
    return len(_TEXT_BULLET.findall(description))


@dataclass(frozen=True)
class NormalizedContent:
    """Derived, read-only plain-text view of a document."""

    text: str  # lowercase blob: summary + experience + project descriptions
    skills: tuple[str, ...]  # lowercase, de-duplicated, first-seen order
    summary: str
    descriptions: tuple[str, ...]
    bullet_counts: tuple[int, ...]

    @property
    def bullet_count(self) -> int:
        return sum(self.bullet_counts)

    def mentions(self, term: str) -> bool:
        """True if the term appears in the blob or inside any skill name."""
        term = term.lower()
        return term in self.text or any(term in s for s in self.skills)


def normalize(document: ResumeDocument) -> NormalizedContent:
    summary = strip_markup(document.summary)
    descriptions = tuple(strip_markup(e.description) for e in document.experience)
    project_descriptions = [strip_markup(p.description) for p in document.projects]

    parts = [summary, *descriptions, *project_descriptions]
    text = " ".join(p for p in parts if p).lower()

    seen: dict[str, None] = {}
    for group in document.skills:
        for name in group.skills:
            key = name.strip().lower()
            if key:
                seen.setdefault(key, None)

    return NormalizedContent(
        text=text,
        skills=tuple(seen),
        summary=summary,
        descriptions=descriptions,
        bullet_counts=tuple(count_bullets(e.description) for e in document.experience),
    )


def is_placeholder(text: str) -> bool:
    lowered = text.lower()
    return any(p.search(lowered) for p in PLACEHOLDER_PATTERNS)


def is_insufficient(content: NormalizedContent, min_length: int = DEFAULT_MIN_CONTENT_LENGTH) -> bool:
    return content_length(content) < min_length


def content_length(content: NormalizedContent) -> int:
    """Length of the descriptive text plus the skill names."""
    return len(" ".join(p for p in (content.text, *content.skills) if p))


def mentions_word(haystack: str, term: str) -> bool:
    """True if term occurs in haystack as a whole token."""
    pattern = rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])"
    return re.search(pattern, haystack) is not None
