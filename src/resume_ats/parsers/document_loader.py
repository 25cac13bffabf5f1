"""Load resume documents from JSON or YAML files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from resume_ats.models.document import ResumeDocument
from resume_ats.parsers.profile_adapter import document_from_profile, looks_like_profile_bundle

logger = logging.getLogger(__name__)


def load_document(file_path: str | Path) -> ResumeDocument:
    """Parse a resume file (JSON, YAML) into a ResumeDocument.

    Files holding a public-profile bundle (``experiences`` instead of
    ``experience``) are converted with the profile adapter.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc
    elif suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path.name}: {exc}") from exc
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Resume file must contain a mapping at the top level: {path.name}")

    # Editor exports wrap the document as {"content": {...}}
    if isinstance(data.get("content"), dict):
        data = data["content"]

    if looks_like_profile_bundle(data):
        logger.debug("Loading %s as a public-profile bundle", path.name)
        return document_from_profile(data)
    return ResumeDocument.from_mapping(data)
