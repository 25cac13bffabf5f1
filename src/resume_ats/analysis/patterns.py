"""Static pattern tables: action verbs, weak phrases and metric detectors.

Each table can be replaced independently (see ``PatternLibrary.from_yaml``)
without touching the check logic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ACTION_VERBS: dict[str, tuple[str, ...]] = {
    "leadership": (
        "Led", "Directed", "Managed", "Supervised", "Coordinated", "Headed",
        "Oversaw", "Spearheaded",
    ),
    "achievement": (
        "Achieved", "Exceeded", "Improved", "Increased", "Reduced", "Decreased",
        "Surpassed", "Maximized", "Minimized",
    ),
    "technical": (
        "Developed", "Designed", "Built", "Implemented", "Architected",
        "Engineered", "Programmed", "Coded", "Deployed",
    ),
    "problem_solving": (
        "Resolved", "Solved", "Optimized", "Streamlined", "Transformed",
        "Automated", "Debugged", "Troubleshot", "Refactored",
    ),
    "creation": (
        "Created", "Launched", "Initiated", "Established", "Founded",
        "Introduced", "Pioneered", "Formulated",
    ),
    "analysis": (
        "Analyzed", "Evaluated", "Assessed", "Researched", "Investigated",
        "Audited", "Identified", "Discovered",
    ),
    "collaboration": (
        "Collaborated", "Partnered", "Facilitated", "Mentored", "Trained",
        "Coached", "Consulted", "Advised",
    ),
    "delivery": (
        "Delivered", "Produced", "Generated", "Executed", "Completed",
        "Accomplished", "Finalized", "Shipped",
    ),
}

WEAK_PHRASES: tuple[str, ...] = (
    "responsible for",
    "helped with",
    "assisted in",
    "worked on",
    "was involved in",
    "participated in",
    "duties included",
    "tasks included",
)

METRIC_PATTERNS: tuple[str, ...] = (
    r"\d+%",  # percentages
    r"\$[\d,]+[kmb]?",  # currency
    r"\d+x\b",  # multipliers
    r"\d+\+?\s*(?:users?|clients?|customers?|team|members?|people|engineers?|developers?)\b",
    r"\d+\+?\s*(?:projects?|apps?|applications?|features?|products?)\b",
    r"\b(?:increased?|decreased?|reduced?|improved?|grew|grow|saved?)\s*(?:by\s*)?\d+",
    r"\d+\s*(?:million|thousand|hundred)\b",
    r"\d+\s*(?:hours?|days?|weeks?|months?)\s*(?:saved?|reduced?|faster)\b",
)


@dataclass(frozen=True)
class PatternLibrary:
    action_verbs: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(ACTION_VERBS))
    weak_phrases: tuple[str, ...] = WEAK_PHRASES
    metric_patterns: tuple[str, ...] = METRIC_PATTERNS

    @cached_property
    def _verb_regexes(self) -> tuple[tuple[str, re.Pattern[str]], ...]:
        seen: dict[str, re.Pattern[str]] = {}
        for verbs in self.action_verbs.values():
            for verb in verbs:
                key = verb.lower()
                if key not in seen:
                    seen[key] = re.compile(rf"\b{re.escape(key)}\b", re.IGNORECASE)
        return tuple((verb, pattern) for verb, pattern in seen.items())

    @cached_property
    def _metric_regexes(self) -> tuple[re.Pattern[str], ...]:
        return tuple(re.compile(p, re.IGNORECASE) for p in self.metric_patterns)

    @property
    def all_verbs(self) -> list[str]:
        return [verb for verb, _ in self._verb_regexes]

    def match_action_verbs(self, text: str) -> list[str]:
        """Distinct action verbs (lowercase) found as whole words, in table order."""
        return [verb for verb, pattern in self._verb_regexes if pattern.search(text)]

    def find_weak_phrases(self, text: str) -> list[str]:
        lowered = text.lower()
        return [phrase for phrase in self.weak_phrases if phrase.lower() in lowered]

    def count_metrics(self, text: str) -> int:
        """Total matches across all metric patterns (overlaps count per pattern)."""
        return sum(len(pattern.findall(text)) for pattern in self._metric_regexes)

    @classmethod
    def from_yaml(cls, path: str | Path) -> PatternLibrary:
        """Load replacement tables from YAML; absent tables keep the defaults.

        Expected keys: ``action_verbs`` (theme -> list), ``weak_phrases``
        (list) and ``metric_patterns`` (list of regular expressions).
        """
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Pattern file must contain a mapping: {path}")

        kwargs: dict = {}
        if "action_verbs" in raw:
            verbs = raw["action_verbs"]
            if not isinstance(verbs, dict):
                raise ValueError("action_verbs must map theme names to verb lists")
            kwargs["action_verbs"] = {str(k): tuple(str(v) for v in vs or ()) for k, vs in verbs.items()}
        if "weak_phrases" in raw:
            kwargs["weak_phrases"] = tuple(str(p).lower() for p in raw["weak_phrases"] or ())
        if "metric_patterns" in raw:
            patterns = tuple(str(p) for p in raw["metric_patterns"] or ())
            for p in patterns:
                try:
                    re.compile(p)
                except re.error as exc:
                    raise ValueError(f"Invalid metric pattern {p!r}: {exc}") from exc
            kwargs["metric_patterns"] = patterns

        logger.debug("Loaded pattern overrides from %s: %s", path, sorted(kwargs))
        return cls(**kwargs)


DEFAULT_PATTERNS = PatternLibrary()
