"""Pull a JSON object out of a model reply."""

from __future__ import annotations

import json
import re

_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def extract_json(text: str) -> dict:
    """Return the JSON object embedded in ``text``.

    Accepts a bare object, an object wrapped in a fenced code block, or an
    object surrounded by prose. A reply cut off mid-object is closed and
    retried once. Raises ValueError when no object can be recovered.
    """
    if not isinstance(text, str):
        raise ValueError("Could not extract JSON from non-text reply")
    text = text.strip()

    candidates = [text, _FENCE.sub("", text).strip()]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        parsed = _loads_object(candidate)
        if parsed is not None:
            return parsed

    if start != -1:
        parsed = _loads_object(_close_truncated(_FENCE.sub("", text[start:]).strip()))
        if parsed is not None:
            return parsed

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _loads_object(candidate: str) -> dict | None:
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _close_truncated(fragment: str) -> str:
    """Append the closers a truncated object is missing."""
    stack: list[str] = []
    in_string = escaped = False
    for ch in fragment:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append("}" if ch == "{" else "]")
        elif ch in "}]" and stack:
            stack.pop()

    repaired = fragment + ('"' if in_string else "")
    repaired = repaired.rstrip().rstrip(",")
    return repaired + "".join(reversed(stack))
