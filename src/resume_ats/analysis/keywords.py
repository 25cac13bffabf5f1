"""Missing-keyword suggestions filtered by the relevance graph."""

from __future__ import annotations

import logging
import re

from resume_ats.analysis.normalizer import NormalizedContent, mentions_word
from resume_ats.analysis.relevance import DEFAULT_GRAPH, KeywordGraph

logger = logging.getLogger(__name__)

DEFAULT_KEYWORD_LIMIT = 6
MAX_KEYWORD_LIMIT = 8

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def _fold(term: str) -> str:
    """Case and punctuation-insensitive form: 'Node.js' -> 'nodejs'."""
    return _NON_ALNUM.sub("", term.lower())


def is_present(keyword: str, content: NormalizedContent) -> bool:
    """True if the keyword already appears in any form in skills or text."""
    key = keyword.lower()
    if key in content.text or any(key in s for s in content.skills):
        return True
    folded = _fold(key)
    if not folded:
        return False
    # near matches: "CI-CD" for "ci/cd", "NodeJS" for "node.js"
    if any(folded in _fold(s) for s in content.skills):
        return True
    return folded in {_fold(token) for token in content.text.split()}


def has_related_signal(keyword: str, content: NormalizedContent, graph: KeywordGraph) -> bool:
    """True if at least one related term appears as a whole token."""
    return any(
        mentions_word(content.text, term) or any(mentions_word(s, term) for s in content.skills)
        for term in graph.related_terms(keyword)
    )


def _covered_by_alias(keyword: str, content: NormalizedContent, graph: KeywordGraph) -> bool:
    return any(
        mentions_word(content.text, alias) or any(mentions_word(s, alias) for s in content.skills)
        for alias in graph.aliases_for(keyword)
    )


def find_missing_keywords(
    content: NormalizedContent,
    graph: KeywordGraph = DEFAULT_GRAPH,
    limit: int = DEFAULT_KEYWORD_LIMIT,
) -> list[str]:
    limit = max(0, min(limit, MAX_KEYWORD_LIMIT))
    found: list[str] = []
    seen: set[str] = set()

    def _add(keyword: str) -> None:
        folded = _fold(keyword)
        if folded in seen or len(found) >= limit:
            return
        seen.add(folded)
        found.append(graph.display(keyword))

    for keyword in graph.edges:
        if len(found) >= limit:
            break
        if is_present(keyword, content):
            continue
        if has_related_signal(keyword, content, graph):
            _add(keyword)

    for keyword in graph.generic:
        if len(found) >= limit:
            break
        if keyword.lower() in graph.edges:
            continue  # already judged by the relevance filter above
        if is_present(keyword, content) or _covered_by_alias(keyword, content, graph):
            continue
        _add(keyword)

    logger.debug("Missing keywords: %s", found)
    return found
