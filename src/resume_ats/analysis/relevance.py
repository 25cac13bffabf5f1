"""Keyword relevance graph used to filter missing-keyword suggestions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# keyword -> terms whose presence makes the keyword a sensible suggestion
RELEVANCE_GRAPH: dict[str, tuple[str, ...]] = {
    "docker": ("kubernetes", "containerization", "devops", "aws", "cloud", "deployment"),
    "kubernetes": ("docker", "containerization", "devops", "aws", "cloud", "k8s"),
    "ci/cd": ("jenkins", "github actions", "devops", "automation", "deployment", "docker"),
    "testing frameworks": ("jest", "cypress", "unit testing", "tdd", "testing", "qa"),
    "jest": ("react", "javascript", "typescript", "testing", "node"),
    "cypress": ("testing", "e2e", "react", "frontend", "javascript"),
    "typescript": ("javascript", "react", "node", "frontend", "angular"),
    "graphql": ("react", "api", "apollo", "node", "frontend"),
    "redis": ("database", "caching", "cache", "performance"),
    "postgresql": ("database", "sql", "orm", "prisma"),
    "mongodb": ("database", "nosql", "mongoose"),
    "aws": ("cloud", "s3", "ec2", "lambda", "devops", "infrastructure"),
    "next.js": ("react", "javascript", "typescript", "frontend", "vercel"),
    "tailwind": ("css", "frontend", "react", "ui", "styling"),
}

DISPLAY_NAMES: dict[str, str] = {
    "docker": "Docker",
    "kubernetes": "Kubernetes",
    "ci/cd": "CI/CD",
    "testing frameworks": "Testing Frameworks",
    "jest": "Jest",
    "cypress": "Cypress",
    "typescript": "TypeScript",
    "graphql": "GraphQL",
    "redis": "Redis",
    "postgresql": "PostgreSQL",
    "mongodb": "MongoDB",
    "aws": "AWS",
    "next.js": "Next.js",
    "tailwind": "Tailwind",
}

GENERIC_KEYWORDS: tuple[str, ...] = (
    "Docker",
    "CI/CD",
    "Testing Frameworks",
    "Cloud Services",
    "Agile",
)

# generic keyword -> terms that already cover it
GENERIC_ALIASES: dict[str, tuple[str, ...]] = {
    "cloud services": ("cloud", "aws", "azure", "gcp", "google cloud", "heroku", "vercel"),
    "agile": ("scrum", "kanban", "sprint", "sprints"),
}


def display_name(keyword: str, names: dict[str, str] | None = None) -> str:
    """Title-case a keyword for display, honouring known spellings."""
    names = DISPLAY_NAMES if names is None else names
    key = keyword.strip().lower()
    if key in names:
        return names[key]
    return " ".join(w if any(c.isupper() for c in w) else w.capitalize() for w in keyword.split())


@dataclass(frozen=True)
class KeywordGraph:
    edges: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(RELEVANCE_GRAPH))
    display_names: dict[str, str] = field(default_factory=lambda: dict(DISPLAY_NAMES))
    generic: tuple[str, ...] = GENERIC_KEYWORDS
    aliases: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(GENERIC_ALIASES))

    def related_terms(self, keyword: str) -> tuple[str, ...]:
        return self.edges.get(keyword.strip().lower(), ())

    def display(self, keyword: str) -> str:
        return display_name(keyword, self.display_names)

    def aliases_for(self, keyword: str) -> tuple[str, ...]:
        return self.aliases.get(keyword.strip().lower(), ())

    @classmethod
    def from_yaml(cls, path: str | Path) -> KeywordGraph:
        """Load a replacement graph.

        The file maps ``graph`` to ``{keyword: [related, ...]}`` and may add
        ``display_names``, ``generic`` (fallback suggestions) and ``aliases``
        (terms that already cover a fallback suggestion).
        """
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Keyword graph file must contain a mapping: {path}")

        kwargs: dict = {}
        graph = raw.get("graph")
        if graph is not None:
            if not isinstance(graph, dict):
                raise ValueError("graph must map keywords to lists of related terms")
            kwargs["edges"] = {
                str(k).strip().lower(): tuple(str(t).strip().lower() for t in terms or ())
                for k, terms in graph.items()
            }
        if "display_names" in raw:
            kwargs["display_names"] = {
                str(k).strip().lower(): str(v) for k, v in (raw["display_names"] or {}).items()
            }
        if "generic" in raw:
            kwargs["generic"] = tuple(str(k) for k in raw["generic"] or ())
        if "aliases" in raw:
            kwargs["aliases"] = {
                str(k).strip().lower(): tuple(str(t).strip().lower() for t in terms or ())
                for k, terms in (raw["aliases"] or {}).items()
            }

        logger.debug("Loaded keyword graph from %s (%d keywords)", path, len(kwargs.get("edges", ())))
        return cls(**kwargs)


DEFAULT_GRAPH = KeywordGraph()
